"""
Parse boundary.

``parse`` turns a raw string or an already-typed value into a ``ParseResult``
holding either the canonical value or a ``ParseError``. Nothing raised by the
matcher, extractors or builder escapes this boundary.

``parse_value`` is the convenience wrapper returning ``None`` for values that
cannot be parsed.
"""

from __future__ import annotations

from datetime import date, time
from functools import lru_cache
from typing import Any, Optional, Union

from timeliness.config import get_settings
from timeliness.infrastructure.formats.defaults import build_default_registry
from timeliness.infrastructure.formats.loader import load_formats_file
from timeliness.infrastructure.formats.registry import FormatRegistry
from timeliness.infrastructure.parsing.builder import build, to_canonical
from timeliness.infrastructure.parsing.matcher import extract
from timeliness.infrastructure.types import (
    CanonicalValue,
    FailureKind,
    ParseResult,
    ValueType,
)
from timeliness.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache()
def get_default_registry() -> FormatRegistry:
    """
    Get the process-wide default registry.

    Built once from settings: the two-digit year threshold and, when
    configured, the custom formats file. Callers wanting different formats
    derive a new registry from this one with ``register``/``remove``.
    """
    settings = get_settings()
    registry = build_default_registry(settings.two_digit_year_threshold)
    if settings.formats_file is not None:
        registry = load_formats_file(
            settings.formats_file, registry, settings.two_digit_year_threshold
        )
    return registry


def parse(
    raw_value: Any,
    value_type: Union[ValueType, str] = ValueType.DATETIME,
    *,
    bounded: bool = True,
    registry: Optional[FormatRegistry] = None,
) -> ParseResult:
    """
    Parse ``raw_value`` as a time, date or datetime.

    Args:
        raw_value: String to parse, or a date/datetime/time passed through
        value_type: Target type; decides which formats are tried and how the
            components are reshaped
        bounded: Require the format to match the whole trimmed string
        registry: Formats to use; defaults to ``get_default_registry()``

    Returns:
        ParseResult with the canonical value, or a FORMAT_MISMATCH /
        CALENDAR_ERROR failure

    Example:
        >>> parse("2:30pm", "time").value
        datetime.datetime(2000, 1, 1, 14, 30)
        >>> parse("2023-02-30", "date").error.kind
        <FailureKind.CALENDAR_ERROR: 'calendar_error'>
    """
    value_type = ValueType.coerce(value_type)

    if isinstance(raw_value, (date, time)):
        if isinstance(raw_value, time) and value_type is ValueType.DATE:
            return ParseResult.failure(
                FailureKind.FORMAT_MISMATCH,
                raw_value,
                "a time of day is not a valid date",
            )
        return ParseResult.success(to_canonical(raw_value, value_type))

    if not isinstance(raw_value, str) or not raw_value.strip():
        return ParseResult.failure(
            FailureKind.FORMAT_MISMATCH,
            raw_value,
            f"cannot parse {raw_value!r} as {value_type.value}",
        )

    formats = (registry or get_default_registry()).definitions(value_type)
    try:
        outcome = extract(raw_value, formats, bounded)
    except (ValueError, TypeError) as exc:
        result = ParseResult.failure(
            FailureKind.FORMAT_MISMATCH,
            raw_value,
            f"cannot parse {raw_value!r} as {value_type.value}: {exc}",
        )
    else:
        if outcome is None:
            result = ParseResult.failure(
                FailureKind.FORMAT_MISMATCH,
                raw_value,
                f"{raw_value!r} does not match any {value_type.value} format",
            )
        else:
            result = build(
                outcome.components, value_type, raw_value, outcome.format_name
            )

    if not result.ok:
        assert result.error is not None
        logger.debug(
            "parse_failed",
            raw_value=raw_value,
            type=value_type.value,
            bounded=bounded,
            kind=result.error.kind.value,
            format_name=result.error.format_name,
            reason=result.error.message,
        )
    return result


def parse_value(
    raw_value: Any,
    value_type: Union[ValueType, str] = ValueType.DATETIME,
    *,
    bounded: bool = True,
    registry: Optional[FormatRegistry] = None,
) -> Optional[CanonicalValue]:
    """
    Backwards-compatible wrapper returning ``None`` for un-parseable values.

    Use ``parse`` when the reason for a failure matters.
    """
    return parse(raw_value, value_type, bounded=bounded, registry=registry).value


__all__ = ["get_default_registry", "parse", "parse_value"]
