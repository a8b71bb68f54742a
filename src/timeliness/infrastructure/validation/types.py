"""Validation types for record-level timeliness validation.

This module defines:
- ErrorSink: the capability a validator needs to report errors
- FieldError: one structured error
- TimelinessErrors: default in-memory ErrorSink implementation
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Protocol


class ErrorSink(Protocol):
    """Receives one rendered message per failed check of a field."""

    def add(self, field: str, message: str, **details: Any) -> None:
        ...


@dataclass(frozen=True)
class FieldError:
    """Structured validation error.

    Attributes:
        field: Name of the attribute that failed validation
        message: Rendered message (e.g. "must be after 2023-01-01")
        error_type: Message key that produced it (e.g. 'after', 'invalid_datetime')
        original_value: Raw value that failed validation

    Example:
        >>> FieldError(
        ...     field='starts_on',
        ...     message='is not a valid date',
        ...     error_type='invalid_datetime',
        ...     original_value='2023-02-30',
        ... )
    """

    field: str
    message: str
    error_type: Optional[str] = None
    original_value: Any = None


class TimelinessErrors:
    """Collect validation errors per field.

    Example:
        >>> errors = TimelinessErrors()
        >>> validates_date("starts_on", after="2023-01-01").validate(record, errors)
        >>> errors.on("starts_on")
        ['must be after 2023-01-01']
    """

    def __init__(self) -> None:
        self.errors: List[FieldError] = []

    def add(
        self,
        field: str,
        message: str,
        *,
        error_type: Optional[str] = None,
        original_value: Any = None,
        **_: Any,
    ) -> None:
        self.errors.append(
            FieldError(
                field=field,
                message=message,
                error_type=error_type,
                original_value=original_value,
            )
        )

    def on(self, field: str) -> List[str]:
        """Messages recorded for ``field``, in the order they were added."""
        return [error.message for error in self.errors if error.field == field]

    def as_dict(self) -> Dict[str, List[str]]:
        result: Dict[str, List[str]] = {}
        for error in self.errors:
            result.setdefault(error.field, []).append(error.message)
        return result

    def clear(self) -> None:
        self.errors.clear()

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)


__all__ = ["ErrorSink", "FieldError", "TimelinessErrors"]
