"""Restriction operators and operands.

A restriction pairs a relational operator with an operand that is resolved
to a comparable value when a record is validated. Operands form a closed set
of four variants, one per resolution strategy:

- LiteralOperand: a date, datetime or time used as-is
- AttributeOperand: a named attribute (or zero-argument method) of the record
- ComputedOperand: a function called with the record
- RawStringOperand: text parsed with unbounded matching
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Union


class Operator(str, Enum):
    """Relational operators, in the order restrictions are evaluated."""

    BEFORE = "before"
    AFTER = "after"
    ON_OR_BEFORE = "on_or_before"
    ON_OR_AFTER = "on_or_after"

    @property
    def compare(self) -> Callable[[Any, Any], bool]:
        return _COMPARISONS[self]


_COMPARISONS: Dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.BEFORE: operator.lt,
    Operator.AFTER: operator.gt,
    Operator.ON_OR_BEFORE: operator.le,
    Operator.ON_OR_AFTER: operator.ge,
}


@dataclass(frozen=True)
class LiteralOperand:
    value: Union[date, time]


@dataclass(frozen=True)
class AttributeOperand:
    name: str


@dataclass(frozen=True)
class ComputedOperand:
    func: Callable[[Any], Any]


@dataclass(frozen=True)
class RawStringOperand:
    text: str


Operand = Union[LiteralOperand, AttributeOperand, ComputedOperand, RawStringOperand]
OPERAND_TYPES = (LiteralOperand, AttributeOperand, ComputedOperand, RawStringOperand)


def attribute(name: str) -> AttributeOperand:
    """Reference a record attribute as a restriction operand."""
    return AttributeOperand(name)


def operand_from_config(value: Any) -> Operand:
    """
    Classify a configuration value as an operand.

    Dates, datetimes and times are literals, callables are computed, strings
    are parsed. Record attributes must be referenced with ``attribute()``
    because a plain string is always treated as text to parse.

    Raises:
        TypeError: For any other kind of value
    """
    if isinstance(value, OPERAND_TYPES):
        return value
    if isinstance(value, (date, time)):
        return LiteralOperand(value)
    if isinstance(value, str):
        return RawStringOperand(value)
    if callable(value):
        return ComputedOperand(value)
    raise TypeError(
        f"Unsupported restriction value {value!r}; expected a date, datetime, time, "
        "string, callable or attribute() reference"
    )


@dataclass(frozen=True)
class RestrictionSpec:
    """One configured restriction; built once, evaluated per record."""

    operator: Operator
    operand: Operand

    @classmethod
    def from_config(cls, option: Union[Operator, str], value: Any) -> "RestrictionSpec":
        return cls(operator=Operator(option), operand=operand_from_config(value))


def restrictions_from_options(options: Mapping[str, Any]) -> List[RestrictionSpec]:
    """
    Build restriction specs from validator options such as ``before=...``.

    Options set to None are skipped; specs follow the Operator order.
    """
    return [
        RestrictionSpec.from_config(op, options[op.value])
        for op in Operator
        if options.get(op.value) is not None
    ]


__all__ = [
    "AttributeOperand",
    "ComputedOperand",
    "LiteralOperand",
    "Operand",
    "Operator",
    "RawStringOperand",
    "RestrictionSpec",
    "attribute",
    "operand_from_config",
    "restrictions_from_options",
]
