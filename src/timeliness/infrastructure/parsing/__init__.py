"""Parsing pipeline: matcher, normalizer, builder and the parse boundary.

Attributes are resolved lazily because the format catalog imports the
normalizer from this package.

Usage:
    >>> from timeliness.infrastructure.parsing import parse
    >>> parse("1/15/23", "date").value
    datetime.date(2023, 1, 15)
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

__all__ = [
    "build",
    "extract",
    "get_default_registry",
    "parse",
    "parse_series",
    "parse_value",
    "resolve_hour",
    "resolve_month",
    "resolve_year",
    "to_canonical",
]

_SUBMODULES = {
    "build": ".builder",
    "to_canonical": ".builder",
    "extract": ".matcher",
    "get_default_registry": ".parser",
    "parse": ".parser",
    "parse_value": ".parser",
    "parse_series": ".series",
    "resolve_hour": ".normalizer",
    "resolve_month": ".normalizer",
    "resolve_year": ".normalizer",
}

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from .builder import build, to_canonical
    from .matcher import extract
    from .normalizer import resolve_hour, resolve_month, resolve_year
    from .parser import get_default_registry, parse, parse_value
    from .series import parse_series


def __getattr__(name: str) -> Any:
    if name in _SUBMODULES:
        module = importlib.import_module(_SUBMODULES[name], __name__)
        return getattr(module, name)
    raise AttributeError(
        f"module 'timeliness.infrastructure.parsing' has no attribute {name!r}"
    )
