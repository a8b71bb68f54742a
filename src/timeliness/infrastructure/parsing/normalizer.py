"""
Component normalization helpers.

Pure functions that turn captured text tokens into numeric date/time
components: 12-hour clock plus meridian into a 24-hour value, two-digit years
into four-digit years and month tokens (digits or English names) into month
numbers.

Malformed tokens raise ``ValueError``; callers decide how a failed token
affects the overall parse.
"""

from __future__ import annotations

from timeliness.infrastructure.constants import DEFAULT_TWO_DIGIT_YEAR_THRESHOLD

# Month name mappings
MONTH_NAMES = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}


def resolve_hour(hour: str, meridian: str) -> int:
    """
    Convert a 12-hour clock hour and meridian into a 24-hour hour.

    Punctuation is stripped from the meridian, so "a.m." and "AM" are the same.

    Example:
        >>> resolve_hour("12", "am")
        0
        >>> resolve_hour("1", "p.m.")
        13
    """
    value = int(hour)
    if meridian.replace(".", "").strip().lower() == "am":
        return 0 if value == 12 else value
    return value if value == 12 else value + 12


def resolve_year(year: str, threshold: int = DEFAULT_TWO_DIGIT_YEAR_THRESHOLD) -> int:
    """
    Expand a two-character year token into a four-digit year.

    Tokens of any other length are parsed unchanged.

    Example:
        >>> resolve_year("29")
        2029
        >>> resolve_year("30")
        1930
        >>> resolve_year("1999")
        1999
    """
    if len(year) == 2:
        century = "20" if int(year) < threshold else "19"
        year = f"{century}{year}"
    return int(year)


def resolve_month(month: str) -> int:
    """Parse a month token given as digits or as an English name/abbreviation."""
    token = month.strip()
    if token.isdigit():
        return int(token)
    try:
        return MONTH_NAMES[token.lower()]
    except KeyError:
        raise ValueError(f"Unknown month name: {month!r}") from None


__all__ = ["MONTH_NAMES", "resolve_hour", "resolve_month", "resolve_year"]
