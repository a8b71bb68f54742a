"""
Error message templates.

Templates use ``str.format`` placeholders: ``{type}`` for the value type in
``invalid_datetime`` and ``{value}`` for the formatted comparison value in
the restriction messages. A catalog is immutable; ``with_overrides`` returns
a new one, so validators can customise wording without touching the
defaults.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional

DEFAULT_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        "blank": "can't be blank",
        "invalid_datetime": "is not a valid {type}",
        "before": "must be before {value}",
        "on_or_before": "must be on or before {value}",
        "after": "must be after {value}",
        "on_or_after": "must be on or after {value}",
        "restriction_invalid": "restriction '{restriction}' value was invalid",
    }
)

# Placeholders each message can be rendered with
MESSAGE_FIELDS: Mapping[str, FrozenSet[str]] = MappingProxyType(
    {
        "blank": frozenset(),
        "invalid_datetime": frozenset({"type"}),
        "before": frozenset({"value"}),
        "on_or_before": frozenset({"value"}),
        "after": frozenset({"value"}),
        "on_or_after": frozenset({"value"}),
        "restriction_invalid": frozenset({"restriction"}),
    }
)


def template_fields(template: str) -> FrozenSet[str]:
    """
    Placeholder names used by a ``str.format`` template, including any
    attribute or index suffix (``"{value.year}"`` yields ``"value.year"``).

    Raises:
        ValueError: If the template is malformed (for example an unclosed brace)
    """
    names = set()
    for _, field_name, _, _ in string.Formatter().parse(template):
        if field_name is not None:
            names.add(field_name)
    return frozenset(names)


@dataclass(frozen=True)
class MessageCatalog:
    """Immutable set of message templates keyed by error name."""

    templates: Mapping[str, str] = field(default_factory=lambda: DEFAULT_MESSAGES)

    def with_overrides(self, overrides: Optional[Mapping[str, str]] = None) -> "MessageCatalog":
        """
        Return a catalog with some templates replaced.

        Raises:
            ValueError: If an override names an unknown message key, is
                malformed, or uses a placeholder the message is not rendered with
        """
        if not overrides:
            return self
        unknown = sorted(set(overrides) - set(self.templates))
        if unknown:
            raise ValueError(
                f"Unknown message keys {unknown}. Available: {sorted(self.templates)}"
            )
        for key, template in overrides.items():
            try:
                used = template_fields(template)
            except ValueError as exc:
                raise ValueError(f"Message '{key}' is not a valid template: {exc}") from exc
            allowed = MESSAGE_FIELDS.get(key, frozenset())
            extra = sorted(used - allowed)
            if extra:
                raise ValueError(
                    f"Message '{key}' uses unknown placeholders {extra}. "
                    f"Allowed: {sorted(allowed)}"
                )
        merged = {**self.templates, **overrides}
        return MessageCatalog(MappingProxyType(merged))

    def render(self, key: str, **values: Any) -> str:
        return self.templates[key].format(**values)


DEFAULT_CATALOG = MessageCatalog()

__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_MESSAGES",
    "MESSAGE_FIELDS",
    "MessageCatalog",
    "template_fields",
]
