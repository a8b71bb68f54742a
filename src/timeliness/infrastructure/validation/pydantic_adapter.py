"""
Pydantic integration adapter.

Provides a ``field_validator`` factory that parses date/time fields with the
timeliness parser and enforces restrictions inside Pydantic models.
Attribute operands are resolved against the fields validated before the
current one (``ValidationInfo.data``), so declare referenced fields first.
"""

from __future__ import annotations

from datetime import datetime, time
from typing import Any, Mapping, Optional, Union, get_args

from pydantic import ValidationInfo, field_validator

from timeliness.infrastructure.formats.registry import FormatRegistry
from timeliness.infrastructure.messages import DEFAULT_CATALOG
from timeliness.infrastructure.parsing.parser import parse
from timeliness.infrastructure.restrictions.evaluator import evaluate_restrictions
from timeliness.infrastructure.restrictions.operands import restrictions_from_options
from timeliness.infrastructure.types import ValueType


class _ValidatedData:
    """Attribute-style view over the fields Pydantic has already validated."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data

    def __getattr__(self, name: str) -> Any:
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(name) from None


def _expects_time_of_day(model: Any, field_name: Optional[str]) -> bool:
    """True when the field accepts ``datetime.time`` but not ``datetime``."""
    fields = getattr(model, "model_fields", {})
    if field_name is None or field_name not in fields:
        return False
    annotation = fields[field_name].annotation
    accepted = set(get_args(annotation)) or {annotation}
    return time in accepted and datetime not in accepted


def timeliness_field_validator(
    *field_names: str,
    type: Union[ValueType, str] = ValueType.DATETIME,
    before: Any = None,
    after: Any = None,
    on_or_before: Any = None,
    on_or_after: Any = None,
    messages: Optional[Mapping[str, str]] = None,
    registry: Optional[FormatRegistry] = None,
) -> Any:
    """
    Field validator decorator for date/time fields.

    None is passed through so Optional fields keep their usual semantics.
    With ``type="time"`` the value is a datetime on 2000-01-01, or a
    ``datetime.time`` when the field is annotated with ``time``.

    Example:
        class Booking(BaseModel):
            starts_on: date
            ends_on: date

            check_ends_on = timeliness_field_validator(
                "ends_on", type="date", after=attribute("starts_on")
            )
    """
    value_type = ValueType.coerce(type)
    catalog = DEFAULT_CATALOG.with_overrides(messages)
    specs = restrictions_from_options(
        {
            "before": before,
            "after": after,
            "on_or_before": on_or_before,
            "on_or_after": on_or_after,
        }
    )

    @field_validator(*field_names, mode="before")
    @classmethod
    def wrapper(cls: Any, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return v

        result = parse(v, value_type, registry=registry)
        if not result.ok:
            raise ValueError(catalog.render("invalid_datetime", type=value_type.value))

        violations = evaluate_restrictions(
            result.value,
            specs,
            _ValidatedData(info.data),
            value_type,
            registry=registry,
            messages=catalog,
        )
        if violations:
            raise ValueError("; ".join(violation.message for violation in violations))
        if value_type is ValueType.TIME and _expects_time_of_day(cls, info.field_name):
            return result.value.time()
        return result.value

    return wrapper


__all__ = ["timeliness_field_validator"]
