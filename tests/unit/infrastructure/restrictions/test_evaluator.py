"""Unit tests for restriction evaluation."""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

import pytest

from timeliness.infrastructure.messages import DEFAULT_CATALOG
from timeliness.infrastructure.restrictions import (
    Operator,
    RestrictionSpec,
    ViolationKind,
    attribute,
    evaluate_restrictions,
    resolve_operand,
)
from timeliness.infrastructure.restrictions.operands import RawStringOperand
from timeliness.infrastructure.types import (
    IncomparableValueError,
    RestrictionResolutionError,
    TimelinessError,
)


@dataclass
class Booking:
    starts_on: Optional[date] = date(2023, 1, 1)
    ends_on: object = None

    def deadline(self):
        return date(2023, 6, 30)

    def broken(self):
        raise RuntimeError("boom")


def spec(option, value):
    return RestrictionSpec.from_config(option, value)


@pytest.mark.unit
class TestEvaluateRestrictions:
    def test_after_violation_message(self):
        violations = evaluate_restrictions(
            date(2022, 12, 31), [spec("after", date(2023, 1, 1))], None, "date"
        )

        assert len(violations) == 1
        assert violations[0].operator is Operator.AFTER
        assert violations[0].kind is ViolationKind.RESTRICTION_VIOLATION
        assert violations[0].message == "must be after 2023-01-01"
        assert violations[0].compare_value == date(2023, 1, 1)

    def test_on_or_after_same_day_passes(self):
        assert (
            evaluate_restrictions(
                date(2023, 1, 1), [spec("on_or_after", date(2023, 1, 1))], None, "date"
            )
            == []
        )

    def test_attribute_operand(self):
        record = Booking(starts_on=date(2023, 3, 1))

        violations = evaluate_restrictions(
            date(2023, 2, 1), [spec("after", attribute("starts_on"))], record, "date"
        )

        assert [v.message for v in violations] == ["must be after 2023-03-01"]

    def test_method_attribute_is_called(self):
        violations = evaluate_restrictions(
            date(2023, 7, 1), [spec("on_or_before", attribute("deadline"))], Booking(), "date"
        )

        assert [v.message for v in violations] == ["must be on or before 2023-06-30"]

    def test_computed_operand(self):
        violations = evaluate_restrictions(
            date(2023, 1, 1),
            [spec("after", lambda record: record.starts_on)],
            Booking(),
            "date",
        )

        assert [v.message for v in violations] == ["must be after 2023-01-01"]

    def test_raw_string_parsed_unbounded(self):
        violations = evaluate_restrictions(
            date(2024, 1, 1), [spec("before", "cutoff 2023-12-31")], None, "date"
        )

        assert [v.message for v in violations] == ["must be before 2023-12-31"]

    def test_string_attribute_value_parsed(self):
        record = Booking(ends_on="2023-05-01")

        violations = evaluate_restrictions(
            date(2023, 5, 2), [spec("before", attribute("ends_on"))], record, "date"
        )

        assert [v.message for v in violations] == ["must be before 2023-05-01"]

    def test_unresolvable_operand_does_not_stop_evaluation(self):
        specs = [
            spec("before", attribute("ends_on")),
            spec("after", date(2023, 1, 1)),
        ]

        violations = evaluate_restrictions(date(2022, 1, 1), specs, Booking(), "date")

        assert [(v.operator, v.kind) for v in violations] == [
            (Operator.BEFORE, ViolationKind.RESOLUTION_ERROR),
            (Operator.AFTER, ViolationKind.RESTRICTION_VIOLATION),
        ]
        assert violations[0].message == "restriction 'before' value was invalid"
        assert violations[0].compare_value is None

    @pytest.mark.parametrize(
        "operand",
        [
            attribute("missing"),
            attribute("broken"),
            lambda record: 1 / 0,
            lambda record: None,
            lambda record: 42,
            "not a date",
        ],
    )
    def test_resolution_errors(self, operand):
        violations = evaluate_restrictions(
            date(2023, 1, 1), [spec("before", operand)], Booking(), "date"
        )

        assert [v.kind for v in violations] == [ViolationKind.RESOLUTION_ERROR]

    def test_time_granularity(self):
        violations = evaluate_restrictions(
            datetime(2023, 5, 5, 14, 0), [spec("before", time(13, 0))], None, "time"
        )

        assert [v.message for v in violations] == ["must be before 13:00:00"]

    def test_datetime_compared_with_date_literal(self):
        violations = evaluate_restrictions(
            datetime(2023, 1, 1, 0, 0, 1), [spec("on_or_before", date(2023, 1, 1))], None
        )

        assert [v.message for v in violations] == [
            "must be on or before 2023-01-01 00:00:00"
        ]

    def test_date_granularity_ignores_time_of_day(self):
        assert (
            evaluate_restrictions(
                datetime(2023, 1, 1, 23, 0),
                [spec("on_or_before", datetime(2023, 1, 1, 8, 0))],
                None,
                "date",
            )
            == []
        )

    def test_time_value_cannot_be_compared_as_date(self):
        with pytest.raises(IncomparableValueError) as exc_info:
            evaluate_restrictions(time(9, 0), [spec("before", date(2023, 1, 1))], None, "date")

        assert isinstance(exc_info.value, TimelinessError)

    def test_custom_messages(self):
        catalog = DEFAULT_CATALOG.with_overrides({"after": "should follow {value}"})

        violations = evaluate_restrictions(
            date(2022, 12, 31),
            [spec("after", date(2023, 1, 1))],
            None,
            "date",
            messages=catalog,
        )

        assert [v.message for v in violations] == ["should follow 2023-01-01"]


@pytest.mark.unit
class TestResolveOperand:
    def test_raw_string_resolves(self):
        assert resolve_operand(RawStringOperand("2023-01-15"), None, "date") == date(2023, 1, 15)

    def test_time_literal_cannot_be_a_date(self):
        with pytest.raises(RestrictionResolutionError):
            resolve_operand(spec("before", time(9, 0)).operand, None, "date")
