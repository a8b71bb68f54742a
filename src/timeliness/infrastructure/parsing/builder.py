"""
Canonical value builder.

Reshapes a six-slot component array ``[year, month, day, hour, minute,
second]`` for the requested value type, enforces calendar validity and builds
the canonical value:

- ``time``: slots 0-2 hold hour/minute/second; they move to slots 3-5 and the
  date becomes the dummy date 2000-01-01. Result is a ``datetime``.
- ``date``: the time slots are zeroed. Result is a ``date``.
- ``datetime``: all six slots are used. Result is a ``datetime``.

``to_canonical`` applies the same reshaping to values that are already
``date``/``datetime``/``time`` objects so they compare at the same
granularity.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time
from typing import Any, Optional, Sequence, Union

from timeliness.infrastructure.constants import (
    COMPONENT_SLOTS,
    DUMMY_DAY,
    DUMMY_MONTH,
    DUMMY_YEAR,
    MAX_MONTH,
    MIN_MONTH,
)
from timeliness.infrastructure.types import (
    CanonicalValue,
    ComponentArray,
    FailureKind,
    ParseResult,
    ValueType,
)

_DATE_FIELDS = ("year", "month", "day")


def reshape(components: Sequence[Optional[int]], value_type: ValueType) -> ComponentArray:
    """Rearrange component slots for ``value_type`` (see module docstring)."""
    slots = list(components[:COMPONENT_SLOTS])
    slots += [None] * (COMPONENT_SLOTS - len(slots))

    if value_type is ValueType.TIME:
        slots[3:6] = slots[0:3]
        slots[0:3] = [DUMMY_YEAR, DUMMY_MONTH, DUMMY_DAY]
    elif value_type is ValueType.DATE:
        slots[3:6] = [0, 0, 0]
    return slots


def calendar_problem(year: int, month: int, day: int) -> Optional[str]:
    """Describe why year/month/day is not a real date, or None if it is."""
    if not MIN_MONTH <= month <= MAX_MONTH:
        return f"month {month} is outside {MIN_MONTH}-{MAX_MONTH}"
    if not 1 <= year <= 9999:
        return f"year {year} is outside 1-9999"
    days_in_month = calendar.monthrange(year, month)[1]
    if not 1 <= day <= days_in_month:
        return f"day {day} is outside 1-{days_in_month} for {year}-{month:02d}"
    return None


def build(
    components: Sequence[Optional[int]],
    value_type: Union[ValueType, str],
    raw_value: Any = None,
    format_name: Optional[str] = None,
) -> ParseResult:
    """
    Build a canonical value from extracted components.

    Missing date slots and impossible dates or times produce a
    ``CALENDAR_ERROR`` result; missing minute/second default to zero.

    Example:
        >>> build([14, 30, None, None, None, None], "time").value
        datetime.datetime(2000, 1, 1, 14, 30)
    """
    value_type = ValueType.coerce(value_type)
    slots = reshape(components, value_type)

    def failure(message: str) -> ParseResult:
        return ParseResult.failure(
            FailureKind.CALENDAR_ERROR, raw_value, message, format_name
        )

    for index, field_name in enumerate(_DATE_FIELDS):
        if slots[index] is None:
            return failure(f"missing {field_name}")
    if value_type is ValueType.TIME and slots[3] is None:
        return failure("missing hour")

    year, month, day = slots[0], slots[1], slots[2]
    problem = calendar_problem(year, month, day)
    if problem is not None:
        return failure(problem)

    hour, minute, second = (slot or 0 for slot in slots[3:6])
    try:
        value = datetime(year, month, day, hour, minute, second)
    except ValueError as exc:
        return failure(str(exc))

    if value_type is ValueType.DATE:
        return ParseResult.success(value.date(), format_name)
    return ParseResult.success(value, format_name)


def to_dummy_time(value: Union[datetime, time]) -> datetime:
    """Anchor the time of day of ``value`` to the dummy date."""
    return datetime(
        DUMMY_YEAR,
        DUMMY_MONTH,
        DUMMY_DAY,
        value.hour,
        value.minute,
        value.second,
        value.microsecond,
    )


def to_canonical(
    value: Union[date, datetime, time], value_type: Union[ValueType, str]
) -> CanonicalValue:
    """
    Reshape an already-typed value to the granularity of ``value_type``.

    Raises:
        TypeError: If ``value`` is not a date, datetime or time, or a plain
            ``time`` is requested as a date
    """
    value_type = ValueType.coerce(value_type)

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.replace(tzinfo=None)
        if value_type is ValueType.TIME:
            return to_dummy_time(value)
        if value_type is ValueType.DATE:
            return value.date()
        return value

    if isinstance(value, date):
        if value_type is ValueType.DATE:
            return value
        if value_type is ValueType.TIME:
            return datetime(DUMMY_YEAR, DUMMY_MONTH, DUMMY_DAY)
        return datetime(value.year, value.month, value.day)

    if isinstance(value, time):
        if value_type is ValueType.DATE:
            raise TypeError("A time of day cannot be compared as a date")
        return to_dummy_time(value)

    raise TypeError(f"Expected date, datetime or time, got {type(value).__name__}")


__all__ = ["build", "calendar_problem", "reshape", "to_canonical", "to_dummy_time"]
