"""
Format matcher.

Tries format definitions in registration order against a string and returns
the components extracted by the first format that accepts it. There is no
backtracking: once a format matches, later formats are not consulted, even
if its extractor then rejects a token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from timeliness.infrastructure.constants import COMPONENT_SLOTS
from timeliness.infrastructure.formats.registry import FormatDefinition
from timeliness.infrastructure.types import ComponentArray


@dataclass(frozen=True)
class MatchOutcome:
    """Components extracted by the accepted format, padded to six slots."""

    format_name: str
    components: ComponentArray


def pad_components(values: Iterable[Optional[int]]) -> ComponentArray:
    """Right-pad component values with None up to six slots."""
    components = list(values)[:COMPONENT_SLOTS]
    return components + [None] * (COMPONENT_SLOTS - len(components))


def extract(
    text: str,
    formats: Iterable[FormatDefinition],
    bounded: bool = True,
) -> Optional[MatchOutcome]:
    """
    Extract components from ``text`` using the first matching format.

    Args:
        text: Raw input; leading and trailing whitespace is ignored
        formats: Definitions in priority order
        bounded: When True the match must consume the whole trimmed string;
            when False the value may be embedded in surrounding text

    Returns:
        MatchOutcome for the first accepted format, or None if none matched

    Raises:
        ValueError: If the accepted format's extractor rejects a token
            (for example an unknown month name)

    Example:
        >>> extract("x2023-01-01", registry.definitions("date"), bounded=False).components
        [2023, 1, 1, None, None, None]
    """
    candidate = text.strip()
    for definition in formats:
        if bounded:
            match = definition.pattern.fullmatch(candidate)
        else:
            match = definition.pattern.search(candidate)
        if match is None:
            continue
        components = definition.extract(match.groups())
        return MatchOutcome(
            format_name=definition.name, components=pad_components(components)
        )
    return None


__all__ = ["MatchOutcome", "extract", "pad_components"]
