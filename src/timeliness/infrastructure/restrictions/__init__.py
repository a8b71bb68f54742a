"""Restriction operands and evaluation.

Usage:
    >>> from timeliness.infrastructure.restrictions import (
    ...     RestrictionSpec,
    ...     attribute,
    ...     evaluate_restrictions,
    ... )
    >>> specs = [RestrictionSpec.from_config("on_or_before", attribute("ends_on"))]
    >>> violations = evaluate_restrictions(value, specs, record, "date")
"""

from timeliness.infrastructure.restrictions.operands import (
    AttributeOperand,
    ComputedOperand,
    LiteralOperand,
    Operand,
    Operator,
    RawStringOperand,
    RestrictionSpec,
    attribute,
    operand_from_config,
    restrictions_from_options,
)
from timeliness.infrastructure.restrictions.evaluator import (
    Violation,
    ViolationKind,
    evaluate_restrictions,
    format_compare_value,
    resolve_operand,
)

__all__ = [
    "AttributeOperand",
    "ComputedOperand",
    "LiteralOperand",
    "Operand",
    "Operator",
    "RawStringOperand",
    "RestrictionSpec",
    "Violation",
    "ViolationKind",
    "attribute",
    "evaluate_restrictions",
    "format_compare_value",
    "operand_from_config",
    "resolve_operand",
    "restrictions_from_options",
]
