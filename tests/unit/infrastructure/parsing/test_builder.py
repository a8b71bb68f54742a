"""Unit tests for canonical value building."""

from datetime import date, datetime, time, timezone

import pytest

from timeliness.infrastructure.parsing.builder import build, reshape, to_canonical
from timeliness.infrastructure.types import FailureKind, ValueType


@pytest.mark.unit
class TestReshape:
    def test_time_moves_to_time_slots(self):
        assert reshape([14, 30, None], ValueType.TIME) == [2000, 1, 1, 14, 30, None]

    def test_date_zeroes_time_slots(self):
        assert reshape([2023, 1, 15, 9, 5, 1], ValueType.DATE) == [2023, 1, 15, 0, 0, 0]


@pytest.mark.unit
class TestBuild:
    def test_time_uses_dummy_date(self):
        result = build([14, 30, None], "time")

        assert result.value == datetime(2000, 1, 1, 14, 30)

    def test_date(self):
        result = build([2023, 1, 15, None, None, None], "date", format_name="ymd")

        assert result.value == date(2023, 1, 15)
        assert result.format_name == "ymd"

    def test_datetime_defaults_missing_seconds(self):
        result = build([2023, 1, 15, 9, 5, None], "datetime")

        assert result.value == datetime(2023, 1, 15, 9, 5)

    def test_leap_day(self):
        assert build([2024, 2, 29], "date").value == date(2024, 2, 29)

        result = build([2023, 2, 29], "date", raw_value="2023-02-29")
        assert result.error.kind is FailureKind.CALENDAR_ERROR
        assert result.error.raw_value == "2023-02-29"

    @pytest.mark.parametrize(
        "components,value_type",
        [
            ([2023, 13, 1], "date"),
            ([2023, 1, None], "date"),
            ([2023, 1, 1, 25, 0, 0], "datetime"),
            ([None, 30, 0], "time"),
            ([12, 60, 0], "time"),
        ],
    )
    def test_calendar_errors(self, components, value_type):
        result = build(components, value_type)

        assert not result.ok
        assert result.error.kind is FailureKind.CALENDAR_ERROR


@pytest.mark.unit
class TestToCanonical:
    def test_datetime_as_date(self):
        assert to_canonical(datetime(2023, 1, 15, 9, 0), "date") == date(2023, 1, 15)

    def test_datetime_as_time(self):
        assert to_canonical(datetime(2023, 1, 15, 9, 5), "time") == datetime(2000, 1, 1, 9, 5)

    def test_aware_datetime_becomes_naive(self):
        aware = datetime(2023, 1, 15, 9, 5, tzinfo=timezone.utc)

        assert to_canonical(aware, "datetime") == datetime(2023, 1, 15, 9, 5)

    def test_date_as_datetime(self):
        assert to_canonical(date(2023, 1, 15), "datetime") == datetime(2023, 1, 15)

    def test_time_as_time(self):
        assert to_canonical(time(13, 0), "time") == datetime(2000, 1, 1, 13, 0)

    def test_time_as_date_rejected(self):
        with pytest.raises(TypeError):
            to_canonical(time(13, 0), "date")

    def test_non_temporal_rejected(self):
        with pytest.raises(TypeError):
            to_canonical("2023-01-15", "date")
