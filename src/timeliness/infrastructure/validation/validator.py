"""
Record-level timeliness validator.

Wires the parser and the restriction evaluator to named attributes of a
record object:

1. Read the raw value (``<attribute>_before_type_cast`` when the record
   exposes it, otherwise the attribute itself)
2. Skip nil/blank values when allowed, report blank values otherwise
3. Parse the raw value as the configured type; on failure report
   ``invalid_datetime`` and optionally reset the attribute to None
4. Evaluate the configured restrictions and report every violation

Usage:
    >>> validator = validates_date("starts_on", on_or_after="2023-01-01",
    ...                            before=attribute("ends_on"))
    >>> errors = TimelinessErrors()
    >>> validator.validate(booking, errors)
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

from timeliness.config import get_settings
from timeliness.infrastructure.formats.registry import FormatRegistry
from timeliness.infrastructure.messages import DEFAULT_CATALOG
from timeliness.infrastructure.parsing.parser import parse
from timeliness.infrastructure.restrictions.evaluator import evaluate_restrictions
from timeliness.infrastructure.restrictions.operands import (
    RestrictionSpec,
    restrictions_from_options,
)
from timeliness.infrastructure.types import ValueType
from timeliness.infrastructure.validation.types import ErrorSink
from timeliness.utils.logging import bind_context

BEFORE_TYPE_CAST_SUFFIX = "_before_type_cast"


def is_blank(value: Any) -> bool:
    """None, whitespace-only strings and empty containers are blank."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


class TimelinessValidator:
    """
    Validate one or more date/time attributes of a record.

    Args:
        attributes: Attribute names to validate
        type: "time", "date" or "datetime"; defaults to the configured
            ``default_type``
        allow_nil: Skip attributes whose raw value is None
        allow_blank: Skip attributes whose raw value is blank
        before, after, on_or_before, on_or_after: Restriction values: a
            date/datetime/time, a string, a callable taking the record, or an
            ``attribute()`` reference
        messages: Message template overrides (see ``DEFAULT_MESSAGES``)
        registry: Format registry; defaults to the process-wide registry
        nullify_on_failure: Set the attribute to None when it cannot be parsed
    """

    def __init__(
        self,
        *attributes: str,
        type: Union[ValueType, str, None] = None,
        allow_nil: bool = False,
        allow_blank: bool = False,
        before: Any = None,
        after: Any = None,
        on_or_before: Any = None,
        on_or_after: Any = None,
        messages: Optional[Mapping[str, str]] = None,
        registry: Optional[FormatRegistry] = None,
        nullify_on_failure: bool = True,
    ) -> None:
        if not attributes:
            raise ValueError("At least one attribute name is required")
        self.attributes: Sequence[str] = tuple(attributes)
        self.value_type = ValueType.coerce(type or get_settings().default_type)
        self.allow_nil = allow_nil
        self.allow_blank = allow_blank
        self.messages = DEFAULT_CATALOG.with_overrides(messages)
        self.registry = registry
        self.nullify_on_failure = nullify_on_failure
        self.restrictions: List[RestrictionSpec] = restrictions_from_options(
            {
                "before": before,
                "after": after,
                "on_or_before": on_or_before,
                "on_or_after": on_or_after,
            }
        )

    def validate(self, record: Any, errors: ErrorSink) -> bool:
        """Validate every configured attribute; return True if none failed."""
        valid = True
        for attribute_name in self.attributes:
            if not self.validate_attribute(record, attribute_name, errors):
                valid = False
        return valid

    def validate_attribute(self, record: Any, attribute_name: str, errors: ErrorSink) -> bool:
        log = bind_context(attribute=attribute_name, type=self.value_type.value)
        raw_value = self.raw_value(record, attribute_name)

        if raw_value is None and self.allow_nil:
            return True
        if is_blank(raw_value):
            if self.allow_blank:
                return True
            errors.add(
                attribute_name,
                self.messages.render("blank"),
                error_type="blank",
                original_value=raw_value,
            )
            return False

        result = parse(raw_value, self.value_type, registry=self.registry)
        if not result.ok:
            assert result.error is not None
            log.debug(
                "attribute_invalid",
                kind=result.error.kind.value,
                reason=result.error.message,
            )
            if self.nullify_on_failure:
                setattr(record, attribute_name, None)
            errors.add(
                attribute_name,
                self.messages.render("invalid_datetime", type=self.value_type.value),
                error_type="invalid_datetime",
                original_value=raw_value,
            )
            return False

        assert result.value is not None
        violations = evaluate_restrictions(
            result.value,
            self.restrictions,
            record,
            self.value_type,
            registry=self.registry,
            messages=self.messages,
        )
        for violation in violations:
            log.debug(
                "restriction_failed",
                restriction=violation.operator.value,
                kind=violation.kind.value,
            )
            errors.add(
                attribute_name,
                violation.message,
                error_type=violation.operator.value,
                original_value=raw_value,
            )
        return not violations

    @staticmethod
    def raw_value(record: Any, attribute_name: str) -> Any:
        """Value before type casting when the record keeps it, else the attribute."""
        before_cast = f"{attribute_name}{BEFORE_TYPE_CAST_SUFFIX}"
        if hasattr(record, before_cast):
            return getattr(record, before_cast)
        return getattr(record, attribute_name)

    def __repr__(self) -> str:
        return (
            f"TimelinessValidator(attributes={list(self.attributes)}, "
            f"type={self.value_type.value!r}, "
            f"restrictions={[r.operator.value for r in self.restrictions]})"
        )


def validates_timeliness_of(*attributes: str, **options: Any) -> TimelinessValidator:
    """Build a validator; ``type`` defaults to the configured default type."""
    return TimelinessValidator(*attributes, **options)


def validates_time(*attributes: str, **options: Any) -> TimelinessValidator:
    """Validate values and restrictions as times of day on the dummy date."""
    options["type"] = ValueType.TIME
    return TimelinessValidator(*attributes, **options)


def validates_date(*attributes: str, **options: Any) -> TimelinessValidator:
    """Validate values and restrictions as dates."""
    options["type"] = ValueType.DATE
    return TimelinessValidator(*attributes, **options)


def validates_datetime(*attributes: str, **options: Any) -> TimelinessValidator:
    """Validate values and restrictions as full datetimes."""
    options["type"] = ValueType.DATETIME
    return TimelinessValidator(*attributes, **options)


__all__ = [
    "TimelinessValidator",
    "is_blank",
    "validates_date",
    "validates_datetime",
    "validates_time",
    "validates_timeliness_of",
]
