"""
Custom format loader.

Applies a YAML document of format customizations on top of a registry,
producing a new registry. Expected shape::

    remove:
      date: [dmyy_slashes]
    date:
      - name: yyyymmdd_compact
        pattern: '(\\d{4})(\\d{2})(\\d{2})'
    time:
      - name: hnn_h
        pattern: '(\\d{1,2})h(\\d{2})'
        flags: [IGNORECASE]
    datetime:
      - name: yyyymmdd_slashes_hhnn_colons
        compose:
          date: yyyymmdd_slashes
          time: hhnn_colons
          separator: '\\s'

``extractor`` names an entry of the extractor catalog. Removals are applied
before additions.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

import yaml

from timeliness.infrastructure.constants import DEFAULT_TWO_DIGIT_YEAR_THRESHOLD
from timeliness.infrastructure.formats.extractors import get_extractor
from timeliness.infrastructure.formats.registry import (
    FormatCategory,
    FormatDefinition,
    FormatRegistry,
)
from timeliness.infrastructure.types import ExtractionArityError, FormatConfigError
from timeliness.utils.logging import get_logger

logger = get_logger(__name__)

_ALLOWED_FLAGS = {
    "IGNORECASE": re.IGNORECASE,
    "VERBOSE": re.VERBOSE,
}


def load_formats_file(
    path: Union[str, Path],
    registry: FormatRegistry,
    threshold: int = DEFAULT_TWO_DIGIT_YEAR_THRESHOLD,
) -> FormatRegistry:
    """Read a YAML formats file and apply it to ``registry``."""
    path = Path(path)
    if not path.exists():
        raise FormatConfigError(f"Formats file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            parsed = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise FormatConfigError(f"Invalid YAML in formats file {path}: {exc}") from exc

    result = apply_format_config(parsed, registry, threshold)
    logger.info(
        "formats_file_loaded",
        path=str(path),
        formats=result.get_statistics(),
    )
    return result


def apply_format_config(
    config: Mapping[str, Any],
    registry: FormatRegistry,
    threshold: int = DEFAULT_TWO_DIGIT_YEAR_THRESHOLD,
) -> FormatRegistry:
    """Apply an already-parsed format configuration mapping to ``registry``."""
    if not isinstance(config, Mapping):
        raise FormatConfigError("Formats configuration must be a mapping")

    known_sections = {"remove"} | {category.value for category in FormatCategory}
    unknown = sorted(set(config) - known_sections)
    if unknown:
        raise FormatConfigError(
            f"Unknown sections in formats configuration: {unknown}. "
            f"Expected: {sorted(known_sections)}"
        )

    result = registry
    removals = config.get("remove") or {}
    if not isinstance(removals, Mapping):
        raise FormatConfigError("'remove' section must map categories to name lists")
    for raw_category, names in removals.items():
        category = _category(raw_category)
        for name in _as_list(names, f"remove.{category.value}"):
            try:
                result = result.remove(category, name)
            except KeyError as exc:
                raise FormatConfigError(str(exc)) from exc

    for category in FormatCategory:
        entries = _as_list(config.get(category.value) or [], category.value)
        for index, entry in enumerate(entries):
            label = f"{category.value}[{index}]"
            result = _apply_entry(result, category, entry, label, threshold)

    return result


def _apply_entry(
    registry: FormatRegistry,
    category: FormatCategory,
    entry: Any,
    label: str,
    threshold: int,
) -> FormatRegistry:
    if not isinstance(entry, Mapping):
        raise FormatConfigError(f"Format entry '{label}' must be a mapping")

    name = entry.get("name")
    if not name:
        raise FormatConfigError(f"Format entry '{label}' missing name field")

    if "compose" in entry:
        if category is not FormatCategory.DATETIME:
            raise FormatConfigError(
                f"Format entry '{label}' uses compose outside the datetime section"
            )
        spec = entry["compose"] or {}
        if not isinstance(spec, Mapping):
            raise FormatConfigError(f"Format entry '{label}' compose section must be a mapping")
        try:
            return registry.compose(
                name,
                spec["date"],
                spec["time"],
                spec.get("separator", r"\s"),
                spec.get("suffix", ""),
            )
        except KeyError as exc:
            raise FormatConfigError(
                f"Format entry '{label}' has an invalid compose section: {exc}"
            ) from exc

    pattern = entry.get("pattern")
    if not pattern:
        raise FormatConfigError(f"Format entry '{label}' missing pattern field")

    try:
        compiled = re.compile(pattern, _flags(entry.get("flags"), label))
    except re.error as exc:
        raise FormatConfigError(f"Format entry '{label}' has an invalid pattern: {exc}") from exc

    extractor_name: Optional[str] = entry.get("extractor")
    extractor = None
    if extractor_name:
        try:
            extractor = get_extractor(extractor_name, threshold)
        except KeyError as exc:
            raise FormatConfigError(str(exc)) from exc

    try:
        definition = FormatDefinition(name, compiled, extractor)
    except ExtractionArityError as exc:
        raise FormatConfigError(f"Format entry '{label}': {exc}") from exc
    return registry.add(category, definition)


def _category(value: Any) -> FormatCategory:
    try:
        return FormatCategory.coerce(value)
    except ValueError as exc:
        raise FormatConfigError(f"Unknown format category {value!r}") from exc


def _flags(values: Optional[Iterable[str]], label: str) -> int:
    flags = 0
    for flag in _as_list(values or [], f"{label}.flags"):
        try:
            flags |= _ALLOWED_FLAGS[str(flag).upper()]
        except KeyError:
            raise FormatConfigError(
                f"Unsupported flag {flag!r} in '{label}'. "
                f"Allowed: {sorted(_ALLOWED_FLAGS)}"
            ) from None
    return flags


def _as_list(value: Any, label: str) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    raise FormatConfigError(f"'{label}' must be a list, got {type(value).__name__}")


__all__ = ["apply_format_config", "load_formats_file"]
