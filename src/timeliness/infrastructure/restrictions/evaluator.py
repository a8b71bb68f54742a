"""Restriction evaluation.

Resolves each restriction operand against the record being validated,
converts both sides to the comparison granularity of the value type and
applies the operator. Each restriction is evaluated independently: an operand
that cannot be resolved yields a RESOLUTION_ERROR violation for that
restriction only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any, List, Optional, Sequence, Union

from timeliness.infrastructure.constants import (
    DATE_DISPLAY_FORMAT,
    DATETIME_DISPLAY_FORMAT,
    TIME_DISPLAY_FORMAT,
)
from timeliness.infrastructure.formats.registry import FormatRegistry
from timeliness.infrastructure.messages import DEFAULT_CATALOG, MessageCatalog
from timeliness.infrastructure.parsing.builder import to_canonical
from timeliness.infrastructure.parsing.parser import parse
from timeliness.infrastructure.restrictions.operands import (
    AttributeOperand,
    ComputedOperand,
    LiteralOperand,
    Operand,
    Operator,
    RawStringOperand,
    RestrictionSpec,
)
from timeliness.infrastructure.types import (
    CanonicalValue,
    IncomparableValueError,
    RestrictionResolutionError,
    ValueType,
)
from timeliness.utils.logging import get_logger

logger = get_logger(__name__)


class ViolationKind(str, Enum):
    RESTRICTION_VIOLATION = "restriction_violation"
    RESOLUTION_ERROR = "resolution_error"


@dataclass(frozen=True)
class Violation:
    """
    A failed restriction.

    Attributes:
        operator: The restriction that failed
        kind: RESTRICTION_VIOLATION when the comparison failed,
            RESOLUTION_ERROR when the operand could not be resolved
        message: Rendered message for the error sink
        compare_value: Resolved comparison value (None for resolution errors)
    """

    operator: Operator
    kind: ViolationKind
    message: str
    compare_value: Optional[CanonicalValue] = None


def format_compare_value(value: CanonicalValue, value_type: Union[ValueType, str]) -> str:
    """Render a comparison value for messages."""
    value_type = ValueType.coerce(value_type)
    if value_type is ValueType.TIME:
        return value.strftime(TIME_DISPLAY_FORMAT)
    if value_type is ValueType.DATE:
        return value.strftime(DATE_DISPLAY_FORMAT)
    return value.strftime(DATETIME_DISPLAY_FORMAT)


def resolve_operand(
    operand: Operand,
    record: Any,
    value_type: Union[ValueType, str],
    registry: Optional[FormatRegistry] = None,
) -> CanonicalValue:
    """
    Resolve an operand to a canonical value of ``value_type``.

    Raises:
        RestrictionResolutionError: If the operand yields nothing comparable
    """
    value_type = ValueType.coerce(value_type)

    if isinstance(operand, LiteralOperand):
        return _coerce_resolved(operand.value, value_type, registry, "literal")

    if isinstance(operand, AttributeOperand):
        try:
            resolved = getattr(record, operand.name)
            if callable(resolved):
                resolved = resolved()
        except AttributeError as exc:
            raise RestrictionResolutionError(
                f"record has no attribute '{operand.name}'"
            ) from exc
        except Exception as exc:
            raise RestrictionResolutionError(
                f"attribute '{operand.name}' raised {type(exc).__name__}: {exc}"
            ) from exc
        return _coerce_resolved(resolved, value_type, registry, f"attribute '{operand.name}'")

    if isinstance(operand, ComputedOperand):
        try:
            resolved = operand.func(record)
        except Exception as exc:
            raise RestrictionResolutionError(
                f"computed restriction raised {type(exc).__name__}: {exc}"
            ) from exc
        return _coerce_resolved(resolved, value_type, registry, "computed restriction")

    if isinstance(operand, RawStringOperand):
        return _parse_loose(operand.text, value_type, registry)

    raise TypeError(f"Unknown restriction operand {operand!r}")


def _coerce_resolved(
    resolved: Any,
    value_type: ValueType,
    registry: Optional[FormatRegistry],
    source: str,
) -> CanonicalValue:
    if resolved is None:
        raise RestrictionResolutionError(f"{source} returned no value")
    if isinstance(resolved, str):
        return _parse_loose(resolved, value_type, registry)
    if isinstance(resolved, (date, time)):
        try:
            return to_canonical(resolved, value_type)
        except TypeError as exc:
            raise RestrictionResolutionError(f"{source}: {exc}") from exc
    raise RestrictionResolutionError(
        f"{source} returned {type(resolved).__name__}, not a date or time"
    )


def _parse_loose(
    text: str, value_type: ValueType, registry: Optional[FormatRegistry]
) -> CanonicalValue:
    result = parse(text, value_type, bounded=False, registry=registry)
    if not result.ok:
        assert result.error is not None
        raise RestrictionResolutionError(result.error.message)
    assert result.value is not None
    return result.value


def evaluate_restrictions(
    value: Union[date, datetime, time],
    specs: Sequence[RestrictionSpec],
    record: Any,
    value_type: Union[ValueType, str] = ValueType.DATETIME,
    *,
    registry: Optional[FormatRegistry] = None,
    messages: Optional[MessageCatalog] = None,
) -> List[Violation]:
    """
    Evaluate ``specs`` against ``value``.

    Args:
        value: The validated value (canonical or any date/datetime/time)
        specs: Restrictions in evaluation order
        record: Object that attribute and computed operands are resolved against
        value_type: Comparison granularity
        registry: Formats used to parse string operands
        messages: Message templates; defaults to the built-in catalog

    Returns:
        One Violation per failed or unresolvable restriction; empty if all pass

    Raises:
        IncomparableValueError: If ``value`` cannot be viewed at the
            granularity of ``value_type`` (a plain time with the date type)

    Example:
        >>> specs = [RestrictionSpec.from_config("after", date(2023, 1, 1))]
        >>> [v.message for v in evaluate_restrictions(date(2022, 12, 31), specs, None, "date")]
        ['must be after 2023-01-01']
    """
    value_type = ValueType.coerce(value_type)
    catalog = messages or DEFAULT_CATALOG
    try:
        subject = to_canonical(value, value_type)
    except TypeError as exc:
        raise IncomparableValueError(str(exc)) from exc

    violations: List[Violation] = []
    for spec in specs:
        try:
            compare = resolve_operand(spec.operand, record, value_type, registry)
        except RestrictionResolutionError as exc:
            logger.debug(
                "restriction_unresolved",
                restriction=spec.operator.value,
                operand=type(spec.operand).__name__,
                reason=str(exc),
            )
            violations.append(
                Violation(
                    operator=spec.operator,
                    kind=ViolationKind.RESOLUTION_ERROR,
                    message=catalog.render(
                        "restriction_invalid", restriction=spec.operator.value
                    ),
                )
            )
            continue

        if spec.operator.compare(subject, compare):
            continue

        violations.append(
            Violation(
                operator=spec.operator,
                kind=ViolationKind.RESTRICTION_VIOLATION,
                message=catalog.render(
                    spec.operator.value,
                    value=format_compare_value(compare, value_type),
                ),
                compare_value=compare,
            )
        )

    return violations


__all__ = [
    "Violation",
    "ViolationKind",
    "evaluate_restrictions",
    "format_compare_value",
    "resolve_operand",
]
