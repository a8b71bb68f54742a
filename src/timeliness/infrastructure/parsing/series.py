"""
Column-level parsing with pandas.

Parses a whole column of raw values with the shared parser and reports the
indices that could not be parsed, so bulk loads can export failed rows
instead of aborting.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Hashable, List, Optional, Tuple, Union

import pandas as pd

from timeliness.infrastructure.formats.registry import FormatRegistry
from timeliness.infrastructure.parsing.parser import parse
from timeliness.infrastructure.types import ValueType
from timeliness.utils.logging import get_logger

logger = get_logger(__name__)

# Non-nanosecond unit; nanoseconds only cover 1677-2262
PARSED_DTYPE = "datetime64[us]"


def parse_series(
    series: pd.Series,
    value_type: Union[ValueType, str] = ValueType.DATETIME,
    *,
    bounded: bool = True,
    registry: Optional[FormatRegistry] = None,
) -> Tuple[pd.Series, List[Hashable]]:
    """
    Parse every value of ``series``; return parsed series and invalid indices.

    Blank values (None, NaN/NaT, empty strings) become NaT and are not counted
    as invalid. The result has microsecond resolution so sentinel dates such as
    9999-12-31 stay representable; time values keep their dummy date.

    Example:
        >>> parsed, invalid = parse_series(pd.Series(["2024-11-15", "bad"]), "date")
        >>> invalid
        [1]
    """
    parsed_values: List[Any] = []
    invalid_rows: List[Hashable] = []
    for idx, value in series.items():
        if _is_blank(value):
            parsed_values.append(pd.NaT)
            continue

        if isinstance(value, pd.Timestamp):
            value = value.to_pydatetime()

        result = parse(value, value_type, bounded=bounded, registry=registry)
        if result.ok:
            parsed_values.append(_as_datetime(result.value))
        else:
            parsed_values.append(pd.NaT)
            invalid_rows.append(idx)

    if invalid_rows:
        logger.info(
            "series_parse_invalid_rows",
            type=ValueType.coerce(value_type).value,
            total_rows=len(series),
            invalid_rows=len(invalid_rows),
        )
    return pd.Series(parsed_values, index=series.index, dtype=PARSED_DTYPE), invalid_rows


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


__all__ = ["parse_series"]
