"""
Named extractor catalog.

Extractors turn the groups captured by a format pattern into ordered component
values: ``[year, month, day]`` for date formats and ``[hour, minute, second]``
for time formats. They are registered by name with the ``@extractor``
decorator so that formats declared in YAML can refer to them.

Extractors that expand two-digit years accept a keyword-only ``threshold``;
``get_extractor`` binds it.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Optional

from timeliness.infrastructure.constants import DEFAULT_TWO_DIGIT_YEAR_THRESHOLD
from timeliness.infrastructure.formats.registry import Extractor
from timeliness.infrastructure.parsing.normalizer import (
    resolve_hour,
    resolve_month,
    resolve_year,
)


@dataclass(frozen=True)
class ExtractorSpec:
    """Catalog entry for a named extractor."""

    name: str
    func: Callable
    description: str

    @property
    def uses_threshold(self) -> bool:
        return "threshold" in inspect.signature(self.func).parameters


_EXTRACTORS: Dict[str, ExtractorSpec] = {}


def extractor(name: str, description: str):
    """
    Register a function as a named extractor.

    Example:
        @extractor(name="ymd", description="year, month, day")
        def year_month_day(year, month, day, *, threshold=30):
            return [resolve_year(year, threshold), resolve_month(month), int(day)]
    """

    def decorator(func: Callable) -> Callable:
        if name in _EXTRACTORS:
            raise ValueError(f"Extractor '{name}' is already registered")
        _EXTRACTORS[name] = ExtractorSpec(name=name, func=func, description=description)
        return func

    return decorator


def get_extractor(
    name: str, threshold: int = DEFAULT_TWO_DIGIT_YEAR_THRESHOLD
) -> Extractor:
    """Look up a named extractor, binding the two-digit year threshold if it takes one."""
    spec = _EXTRACTORS.get(name)
    if spec is None:
        raise KeyError(
            f"Extractor '{name}' not registered. Available: {sorted(_EXTRACTORS)}"
        )
    if spec.uses_threshold:
        return partial(spec.func, threshold=threshold)
    return spec.func


def list_extractors() -> List[ExtractorSpec]:
    return list(_EXTRACTORS.values())


# --- Date extractors -------------------------------------------------------------
@extractor(name="ymd", description="year, month, day")
def year_month_day(
    year: str, month: str, day: str, *, threshold: int = DEFAULT_TWO_DIGIT_YEAR_THRESHOLD
) -> List[Optional[int]]:
    return [resolve_year(year, threshold), resolve_month(month), int(day)]


@extractor(name="mdy", description="month, day, year (US order)")
def month_day_year(
    month: str, day: str, year: str, *, threshold: int = DEFAULT_TWO_DIGIT_YEAR_THRESHOLD
) -> List[Optional[int]]:
    return [resolve_year(year, threshold), resolve_month(month), int(day)]


@extractor(name="dmy", description="day, month, year")
def day_month_year(
    day: str, month: str, year: str, *, threshold: int = DEFAULT_TWO_DIGIT_YEAR_THRESHOLD
) -> List[Optional[int]]:
    return [resolve_year(year, threshold), resolve_month(month), int(day)]


# --- Time extractors -------------------------------------------------------------
@extractor(name="hn_meridian", description="12-hour hour, minute, am/pm")
def hour_minute_meridian(hour: str, minute: str, meridian: str) -> List[Optional[int]]:
    return [resolve_hour(hour, meridian), int(minute), 0]


@extractor(name="h_meridian", description="12-hour hour, am/pm")
def hour_meridian(hour: str, meridian: str) -> List[Optional[int]]:
    return [resolve_hour(hour, meridian), 0, 0]


__all__ = [
    "ExtractorSpec",
    "day_month_year",
    "extractor",
    "get_extractor",
    "hour_meridian",
    "hour_minute_meridian",
    "list_extractors",
    "month_day_year",
    "year_month_day",
]
