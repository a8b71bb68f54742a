"""
Format registry for time, date and datetime patterns.

A format is a named regular expression plus an optional extractor that maps
the captured groups to date/time components. Formats are grouped by category
and kept in registration order, which is also the order in which the matcher
tries them.

Registries are immutable values: ``register``/``remove``/``compose`` return a
new registry and leave the receiver untouched, so per-validator customization
never leaks into the process-wide default.
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Callable,
    Dict,
    Iterable,
    Mapping,
    Optional,
    Pattern,
    Sequence,
    Tuple,
    Union,
)

from timeliness.infrastructure.constants import COMPONENT_SLOTS, DATE_SLOTS, TIME_SLOTS
from timeliness.infrastructure.types import (
    ComponentArray,
    DuplicateFormatError,
    ExtractionArityError,
    ValueType,
)
from timeliness.utils.logging import get_logger

logger = get_logger(__name__)

Extractor = Callable[..., Sequence[Optional[int]]]
PatternLike = Union[str, Pattern[str]]


class FormatCategory(str, Enum):
    """Format categories, one per value type."""

    TIME = "time"
    DATE = "date"
    DATETIME = "datetime"

    @classmethod
    def coerce(cls, value: Union["FormatCategory", ValueType, str]) -> "FormatCategory":
        if isinstance(value, cls):
            return value
        if isinstance(value, ValueType):
            return cls(value.value)
        return cls(str(value).lower())


def extractor_arity(func: Callable) -> Optional[int]:
    """
    Number of positional arguments an extractor accepts.

    Returns None when the extractor takes ``*args`` and so accepts any number
    of groups.
    """
    signature = inspect.signature(func)
    positional = 0
    for param in signature.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    return positional


def groups_to_components(groups: Sequence[Optional[str]]) -> ComponentArray:
    """Convert up to six captured groups to integers, keeping absent groups None."""
    return [int(group) if group is not None else None for group in groups[:COMPONENT_SLOTS]]


@dataclass(frozen=True)
class FormatDefinition:
    """
    One accepted textual shape for a time, date or datetime value.

    Attributes:
        name: Unique key within its category
        pattern: Compiled regular expression; string patterns are compiled
        extractor: Optional function receiving the captured groups as strings
            and returning the ordered component values

    Raises:
        ExtractionArityError: If the extractor does not accept exactly one
            positional argument per capture group
    """

    name: str
    pattern: Pattern[str]
    extractor: Optional[Extractor] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.pattern, str):
            object.__setattr__(self, "pattern", re.compile(self.pattern))

        if self.extractor is None:
            return
        if not callable(self.extractor):
            raise ExtractionArityError(
                f"Extractor for format '{self.name}' must be callable"
            )

        try:
            arity = extractor_arity(self.extractor)
        except (TypeError, ValueError):  # pragma: no cover - builtins without signature
            return
        if arity is not None and arity != self.pattern.groups:
            raise ExtractionArityError(
                f"Extractor for format '{self.name}' takes {arity} arguments but "
                f"pattern {self.pattern.pattern!r} has {self.pattern.groups} groups"
            )

    def extract(self, groups: Sequence[Optional[str]]) -> ComponentArray:
        """Map captured groups to component values (not yet padded)."""
        if self.extractor is None:
            return groups_to_components(groups)
        return list(self.extractor(*groups))


def _pad(values: Sequence[Optional[int]], size: int) -> ComponentArray:
    padded = list(values[:size])
    return padded + [None] * (size - len(padded))


def compose(
    date_format: FormatDefinition,
    time_format: FormatDefinition,
    separator: str = r"\s",
    *,
    name: Optional[str] = None,
    suffix: str = "",
) -> FormatDefinition:
    """
    Build a datetime format from a date format and a time format.

    The new pattern is the date source, the separator, the time source and an
    optional suffix, concatenated as regex source. The date side fills
    component slots 0-2 and the time side slots 3-5; groups captured by the
    suffix (for example a UTC offset) are not extracted.

    Example:
        >>> iso = compose(date_fmt, time_fmt, "T", name="iso8601",
        ...               suffix=r"(?:Z|[-+](\\d{2}):(\\d{2}))?")
    """
    date_groups = date_format.pattern.groups
    time_groups = time_format.pattern.groups
    pattern = re.compile(
        f"{date_format.pattern.pattern}{separator}{time_format.pattern.pattern}{suffix}",
        date_format.pattern.flags | time_format.pattern.flags,
    )

    def combined(*groups: Optional[str]) -> ComponentArray:
        date_part = date_format.extract(groups[:date_groups])
        time_part = time_format.extract(groups[date_groups : date_groups + time_groups])
        return _pad(date_part, DATE_SLOTS) + _pad(time_part, TIME_SLOTS)

    return FormatDefinition(
        name=name or f"{date_format.name}_{time_format.name}",
        pattern=pattern,
        extractor=combined,
    )


class FormatRegistry:
    """
    Ordered, immutable collection of format definitions per category.

    Example:
        >>> registry = FormatRegistry.from_definitions({"date": [ymd_dashes]})
        >>> custom = registry.register("date", "compact", r"(\\d{4})(\\d{2})(\\d{2})")
        >>> [d.name for d in custom.definitions("date")]
        ['ymd_dashes', 'compact']
    """

    def __init__(
        self,
        formats: Optional[Mapping[FormatCategory, Tuple[FormatDefinition, ...]]] = None,
    ) -> None:
        self._formats: Dict[FormatCategory, Tuple[FormatDefinition, ...]] = {
            category: tuple((formats or {}).get(category, ())) for category in FormatCategory
        }

    @classmethod
    def from_definitions(
        cls,
        definitions: Mapping[Union[FormatCategory, str], Iterable[FormatDefinition]],
    ) -> "FormatRegistry":
        """
        Build a registry from ordered definition lists.

        Raises:
            DuplicateFormatError: If a category lists the same name twice
        """
        formats: Dict[FormatCategory, Tuple[FormatDefinition, ...]] = {}
        for raw_category, items in definitions.items():
            category = FormatCategory.coerce(raw_category)
            seen: Dict[str, FormatDefinition] = {}
            for definition in items:
                if definition.name in seen:
                    raise DuplicateFormatError(
                        f"Format '{definition.name}' declared twice in category "
                        f"'{category.value}' ({seen[definition.name].pattern.pattern!r} "
                        f"and {definition.pattern.pattern!r})"
                    )
                seen[definition.name] = definition
            formats[category] = tuple(seen.values())
        return cls(formats)

    # --- Queries ----------------------------------------------------------------
    def definitions(
        self, category: Union[FormatCategory, ValueType, str]
    ) -> Tuple[FormatDefinition, ...]:
        """Return the definitions of a category in match-priority order."""
        return self._formats[FormatCategory.coerce(category)]

    def names(self, category: Union[FormatCategory, ValueType, str]) -> Tuple[str, ...]:
        return tuple(d.name for d in self.definitions(category))

    def get(
        self, category: Union[FormatCategory, ValueType, str], name: str
    ) -> FormatDefinition:
        for definition in self.definitions(category):
            if definition.name == name:
                return definition
        raise KeyError(
            f"Format '{name}' not registered in category "
            f"'{FormatCategory.coerce(category).value}'"
        )

    def has(self, category: Union[FormatCategory, ValueType, str], name: str) -> bool:
        return name in self.names(category)

    # --- Customization ----------------------------------------------------------
    def register(
        self,
        category: Union[FormatCategory, ValueType, str],
        name: str,
        pattern: PatternLike,
        extractor: Optional[Extractor] = None,
    ) -> "FormatRegistry":
        """
        Return a new registry with the definition added.

        A new name is appended (lowest priority). An existing name is replaced
        in place, keeping its priority; the replacement is logged so that
        accidental collisions are visible.
        """
        return self.add(category, FormatDefinition(name, pattern, extractor))

    def add(
        self,
        category: Union[FormatCategory, ValueType, str],
        definition: FormatDefinition,
    ) -> "FormatRegistry":
        category = FormatCategory.coerce(category)
        current = list(self._formats[category])
        for index, existing in enumerate(current):
            if existing.name == definition.name:
                logger.warning(
                    "format_replaced",
                    category=category.value,
                    name=definition.name,
                    previous_pattern=existing.pattern.pattern,
                    pattern=definition.pattern.pattern,
                )
                current[index] = definition
                break
        else:
            current.append(definition)
            logger.debug(
                "format_registered", category=category.value, name=definition.name
            )
        return self._replace(category, tuple(current))

    def remove(
        self, category: Union[FormatCategory, ValueType, str], name: str
    ) -> "FormatRegistry":
        """Return a new registry without the named definition."""
        category = FormatCategory.coerce(category)
        if not self.has(category, name):
            raise KeyError(
                f"Format '{name}' not registered in category '{category.value}'"
            )
        remaining = tuple(d for d in self._formats[category] if d.name != name)
        return self._replace(category, remaining)

    def compose(
        self,
        name: str,
        date_name: str,
        time_name: str,
        separator: str = r"\s",
        suffix: str = "",
    ) -> "FormatRegistry":
        """Compose two registered formats and register the result as a datetime format."""
        definition = compose(
            self.get(FormatCategory.DATE, date_name),
            self.get(FormatCategory.TIME, time_name),
            separator,
            name=name,
            suffix=suffix,
        )
        return self.add(FormatCategory.DATETIME, definition)

    def _replace(
        self, category: FormatCategory, definitions: Tuple[FormatDefinition, ...]
    ) -> "FormatRegistry":
        formats = dict(self._formats)
        formats[category] = definitions
        return FormatRegistry(formats)

    def get_statistics(self) -> Dict[str, int]:
        """Number of formats per category."""
        return {category.value: len(items) for category, items in self._formats.items()}

    def __repr__(self) -> str:
        return f"FormatRegistry({self.get_statistics()})"
