"""
Default time, date and datetime formats.

Order matters: the matcher accepts the first format that matches, so more
specific shapes come before looser ones. Where two formats share a pattern
(for example ``mdyyyy_slashes`` and ``dmyyyy_slashes``) the earlier one wins
and the later one only becomes reachable once the earlier one is removed.

Patterns carry no ``^``/``$`` anchors so that they can be composed into
datetime formats; bounded matching is enforced by the matcher.
"""

from __future__ import annotations

import re
from typing import Dict, List

from timeliness.infrastructure.constants import DEFAULT_TWO_DIGIT_YEAR_THRESHOLD
from timeliness.infrastructure.formats.extractors import get_extractor
from timeliness.infrastructure.formats.registry import (
    FormatCategory,
    FormatDefinition,
    FormatRegistry,
    compose,
)

_MERIDIAN = r"((?:a|p)\.?m\.?)"

# UTC offset captured by the iso8601 format; not applied to the value
ISO8601_OFFSET_SUFFIX = r"(?:Z|[-+](\d{2}):(\d{2}))?"


def default_time_formats() -> List[FormatDefinition]:
    """Time formats; extracted values are ordered [hour, minute, second]."""
    hn_meridian = get_extractor("hn_meridian")
    return [
        FormatDefinition("hhnnss_colons", r"(\d{2}):(\d{2}):(\d{2})"),
        FormatDefinition("hhnnss_dashes", r"(\d{2})-(\d{2})-(\d{2})"),
        FormatDefinition("hhnn_colons", r"(\d{2}):(\d{2})"),
        FormatDefinition("hnn_dots", r"(\d{1,2})\.(\d{2})"),
        FormatDefinition("hnn_spaces", r"(\d{1,2})\s(\d{2})"),
        FormatDefinition("hnn_dashes", r"(\d{1,2})-(\d{2})"),
        FormatDefinition(
            "hnn_ampm_colons",
            re.compile(rf"(\d{{1,2}}):(\d{{2}})\s?{_MERIDIAN}", re.IGNORECASE),
            hn_meridian,
        ),
        FormatDefinition(
            "hnn_ampm_dots",
            re.compile(rf"(\d{{1,2}})\.(\d{{2}})\s?{_MERIDIAN}", re.IGNORECASE),
            hn_meridian,
        ),
        FormatDefinition(
            "hnn_ampm_spaces",
            re.compile(rf"(\d{{1,2}})\s(\d{{2}})\s?{_MERIDIAN}", re.IGNORECASE),
            hn_meridian,
        ),
        FormatDefinition(
            "hnn_ampm_dashes",
            re.compile(rf"(\d{{1,2}})-(\d{{2}})\s?{_MERIDIAN}", re.IGNORECASE),
            hn_meridian,
        ),
        FormatDefinition(
            "h_ampm",
            re.compile(rf"(\d{{1,2}})\s?{_MERIDIAN}", re.IGNORECASE),
            get_extractor("h_meridian"),
        ),
    ]


def default_date_formats(
    threshold: int = DEFAULT_TWO_DIGIT_YEAR_THRESHOLD,
) -> List[FormatDefinition]:
    """Date formats; extracted values are ordered [year, month, day]."""
    mdy = get_extractor("mdy", threshold)
    dmy = get_extractor("dmy", threshold)
    return [
        FormatDefinition("yyyymmdd_slashes", r"(\d{4})/(\d{2})/(\d{2})"),
        FormatDefinition("yyyymmdd_dashes", r"(\d{4})-(\d{2})-(\d{2})"),
        FormatDefinition("yyyymmdd_dots", r"(\d{4})\.(\d{2})\.(\d{2})"),
        FormatDefinition("mdyyyy_slashes", r"(\d{1,2})/(\d{1,2})/(\d{4})", mdy),
        FormatDefinition("dmyyyy_slashes", r"(\d{1,2})/(\d{1,2})/(\d{4})", dmy),
        FormatDefinition("dmyyyy_dashes", r"(\d{1,2})-(\d{1,2})-(\d{4})", dmy),
        FormatDefinition("dmyyyy_dots", r"(\d{1,2})\.(\d{1,2})\.(\d{4})", dmy),
        FormatDefinition("mdyy_slashes", r"(\d{1,2})/(\d{1,2})/(\d{2})", mdy),
        FormatDefinition("dmyy_slashes", r"(\d{1,2})/(\d{1,2})/(\d{2})", dmy),
        FormatDefinition("dmyy_dashes", r"(\d{1,2})-(\d{1,2})-(\d{2})", dmy),
        FormatDefinition("dmyy_dots", r"(\d{1,2})\.(\d{1,2})\.(\d{2})", dmy),
        FormatDefinition("d_mmm_yyyy", r"(\d{1,2}) ([A-Za-z]{3,9}) (\d{4})", dmy),
        FormatDefinition("d_mmm_yy", r"(\d{1,2}) ([A-Za-z]{3,9}) (\d{2})", dmy),
    ]


def default_datetime_formats(
    date_formats: List[FormatDefinition], time_formats: List[FormatDefinition]
) -> List[FormatDefinition]:
    """Datetime formats composed from the default date and time formats."""
    dates = {d.name: d for d in date_formats}
    times = {t.name: t for t in time_formats}
    return [
        compose(
            dates["yyyymmdd_dashes"],
            times["hhnnss_colons"],
            r"\s",
            name="yyyymmdd_dashes_hhnnss_colons",
        ),
        compose(
            dates["yyyymmdd_dashes"],
            times["hhnn_colons"],
            r"\s",
            name="yyyymmdd_dashes_hhnn_colons",
        ),
        compose(
            dates["yyyymmdd_dashes"],
            times["hhnnss_colons"],
            "T",
            name="iso8601",
            suffix=ISO8601_OFFSET_SUFFIX,
        ),
    ]


def build_default_registry(
    threshold: int = DEFAULT_TWO_DIGIT_YEAR_THRESHOLD,
) -> FormatRegistry:
    """
    Build the default registry.

    Uses ``FormatRegistry.from_definitions`` so a name declared twice in the
    default sets raises ``DuplicateFormatError`` instead of silently
    shadowing the earlier pattern.
    """
    time_formats = default_time_formats()
    date_formats = default_date_formats(threshold)
    definitions: Dict[FormatCategory, List[FormatDefinition]] = {
        FormatCategory.TIME: time_formats,
        FormatCategory.DATE: date_formats,
        FormatCategory.DATETIME: default_datetime_formats(date_formats, time_formats),
    }
    return FormatRegistry.from_definitions(definitions)


__all__ = [
    "ISO8601_OFFSET_SUFFIX",
    "build_default_registry",
    "default_date_formats",
    "default_datetime_formats",
    "default_time_formats",
]
