"""Format registry, default formats and the extractor catalog.

Usage:
    >>> from timeliness.infrastructure.formats import build_default_registry
    >>> registry = build_default_registry()
    >>> registry = registry.register("date", "yyyymmdd_compact", r"(\\d{4})(\\d{2})(\\d{2})")
"""

from timeliness.infrastructure.formats.registry import (
    Extractor,
    FormatCategory,
    FormatDefinition,
    FormatRegistry,
    compose,
)
from timeliness.infrastructure.formats.extractors import (
    extractor,
    get_extractor,
    list_extractors,
)
from timeliness.infrastructure.formats.defaults import build_default_registry
from timeliness.infrastructure.formats.loader import (
    apply_format_config,
    load_formats_file,
)

__all__ = [
    "Extractor",
    "FormatCategory",
    "FormatDefinition",
    "FormatRegistry",
    "apply_format_config",
    "build_default_registry",
    "compose",
    "extractor",
    "get_extractor",
    "list_extractors",
    "load_formats_file",
]
