"""Shared types and exceptions for the infrastructure layer.

This module defines the value types and the error taxonomy used across
format registration, parsing and restriction evaluation:

- ValueType: the three kinds of value a validator can produce
- ParseError / ParseResult: explicit outcome of the parse boundary
- TimelinessError and subclasses: configuration-time errors and the
  exceptions raised by ``ParseResult.unwrap()``
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional, Union

ComponentArray = List[Optional[int]]
CanonicalValue = Union[date, datetime]


class ValueType(str, Enum):
    """Kind of value being parsed or compared."""

    TIME = "time"
    DATE = "date"
    DATETIME = "datetime"

    @classmethod
    def coerce(cls, value: Union["ValueType", str]) -> "ValueType":
        """Accept either a ValueType or its string name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise ValueError(
                f"Unknown value type {value!r}. Expected one of: "
                f"{[member.value for member in cls]}"
            ) from exc


class TimelinessError(Exception):
    """Base class for all timeliness errors."""


class ExtractionArityError(TimelinessError, ValueError):
    """Raised when an extractor's arity does not match its pattern's groups."""


class DuplicateFormatError(TimelinessError, ValueError):
    """Raised when a format set declares the same name twice in one category."""


class FormatConfigError(TimelinessError, ValueError):
    """Raised when a custom formats file is malformed."""


class FormatMismatchError(TimelinessError, ValueError):
    """No registered format matched the input."""


class CalendarError(TimelinessError, ValueError):
    """Extracted components do not form a valid calendar date or time."""


class RestrictionResolutionError(TimelinessError, ValueError):
    """A restriction operand could not be resolved to a comparable value."""


class IncomparableValueError(TimelinessError, TypeError):
    """A validated value cannot be compared at the requested value type."""


class FailureKind(str, Enum):
    FORMAT_MISMATCH = "format_mismatch"
    CALENDAR_ERROR = "calendar_error"


@dataclass(frozen=True)
class ParseError:
    """Why a value could not be parsed.

    Attributes:
        kind: FORMAT_MISMATCH when no format accepted the text, CALENDAR_ERROR
            when the extracted components are not a real date or time
        raw_value: The value handed to the parser
        message: Human-readable diagnostic
        format_name: Name of the format that matched, if any
    """

    kind: FailureKind
    raw_value: Any
    message: str
    format_name: Optional[str] = None

    def to_exception(self) -> TimelinessError:
        if self.kind is FailureKind.CALENDAR_ERROR:
            return CalendarError(self.message)
        return FormatMismatchError(self.message)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing: either a canonical value or a ParseError.

    Example:
        >>> result = parse("2023-01-15", "date")
        >>> result.ok, result.value
        (True, datetime.date(2023, 1, 15))
    """

    value: Optional[CanonicalValue] = None
    error: Optional[ParseError] = None
    format_name: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("ParseResult requires exactly one of value or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls, value: CanonicalValue, format_name: Optional[str] = None
    ) -> "ParseResult":
        return cls(value=value, format_name=format_name)

    @classmethod
    def failure(
        cls,
        kind: FailureKind,
        raw_value: Any,
        message: str,
        format_name: Optional[str] = None,
    ) -> "ParseResult":
        return cls(
            error=ParseError(
                kind=kind,
                raw_value=raw_value,
                message=message,
                format_name=format_name,
            ),
            format_name=format_name,
        )

    def unwrap(self) -> CanonicalValue:
        """Return the value or raise the exception matching the failure kind."""
        if self.error is not None:
            raise self.error.to_exception()
        assert self.value is not None
        return self.value


__all__ = [
    "CalendarError",
    "CanonicalValue",
    "ComponentArray",
    "DuplicateFormatError",
    "ExtractionArityError",
    "FailureKind",
    "FormatConfigError",
    "FormatMismatchError",
    "IncomparableValueError",
    "ParseError",
    "ParseResult",
    "RestrictionResolutionError",
    "TimelinessError",
    "ValueType",
]
