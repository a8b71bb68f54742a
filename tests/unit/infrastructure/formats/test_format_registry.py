"""Unit tests for FormatRegistry, FormatDefinition and compose."""

import json
import logging
import re

import pytest

from timeliness.infrastructure.formats import (
    FormatCategory,
    FormatDefinition,
    FormatRegistry,
    build_default_registry,
    compose,
    get_extractor,
)
from timeliness.infrastructure.types import DuplicateFormatError, ExtractionArityError


@pytest.fixture
def ymd_dashes() -> FormatDefinition:
    return FormatDefinition("ymd_dashes", r"(\d{4})-(\d{2})-(\d{2})")


@pytest.fixture
def registry(ymd_dashes: FormatDefinition) -> FormatRegistry:
    return FormatRegistry.from_definitions({"date": [ymd_dashes]})


@pytest.mark.unit
class TestFormatDefinition:
    def test_string_pattern_is_compiled(self, ymd_dashes):
        assert isinstance(ymd_dashes.pattern, re.Pattern)
        assert ymd_dashes.pattern.groups == 3

    def test_extractor_arity_mismatch_raises_at_definition(self):
        with pytest.raises(ExtractionArityError) as exc_info:
            FormatDefinition("bad", r"(\d+)-(\d+)", lambda first: [int(first)])
        assert "takes 1 arguments" in str(exc_info.value)

    def test_var_positional_extractor_accepts_any_group_count(self):
        definition = FormatDefinition(
            "reversed", r"(\d{2})/(\d{2})/(\d{4})", lambda *groups: [int(g) for g in reversed(groups)]
        )
        assert definition.extract(("15", "01", "2023")) == [2023, 1, 15]

    def test_bound_threshold_keeps_positional_arity(self):
        definition = FormatDefinition(
            "mdyy", r"(\d{1,2})/(\d{1,2})/(\d{2})", get_extractor("mdy", 50)
        )
        assert definition.extract(("1", "15", "49")) == [2049, 1, 15]

    def test_without_extractor_converts_groups_and_keeps_absent(self):
        definition = FormatDefinition("hh_optional_nn", r"(\d{2})(?::(\d{2}))?")
        assert definition.extract(("09", None)) == [9, None]


@pytest.mark.unit
class TestFormatRegistry:
    def test_register_returns_new_registry(self, registry):
        updated = registry.register("date", "compact", r"(\d{4})(\d{2})(\d{2})")

        assert updated.names("date") == ("ymd_dashes", "compact")
        assert registry.names("date") == ("ymd_dashes",)

    def test_register_existing_name_replaces_in_place(self, registry):
        updated = registry.register("date", "first", r"(\d{4})")
        updated = updated.register("date", "ymd_dashes", r"(\d{4})/(\d{2})/(\d{2})")

        assert updated.names("date") == ("ymd_dashes", "first")
        assert updated.get("date", "ymd_dashes").pattern.pattern == r"(\d{4})/(\d{2})/(\d{2})"

    def test_register_existing_name_logs_warning(self, registry, caplog):
        caplog.set_level(logging.WARNING)

        registry.register("date", "ymd_dashes", r"(\d{4})\.(\d{2})\.(\d{2})")

        events = [json.loads(record.getMessage()) for record in caplog.records]
        replaced = [event for event in events if event.get("event") == "format_replaced"]
        assert replaced
        assert replaced[-1]["name"] == "ymd_dashes"
        assert replaced[-1]["category"] == "date"

    def test_has_detects_collision_before_registering(self, registry):
        assert registry.has("date", "ymd_dashes")
        assert not registry.has("time", "ymd_dashes")

    def test_from_definitions_rejects_duplicate_names(self):
        with pytest.raises(DuplicateFormatError) as exc_info:
            FormatRegistry.from_definitions(
                {
                    "date": [
                        FormatDefinition("yyyymmdd_slashes", r"(\d{4})/(\d{2})/(\d{2})"),
                        FormatDefinition("yyyymmdd_slashes", r"(\d{4})\.(\d{2})\.(\d{2})"),
                    ]
                }
            )
        assert "declared twice" in str(exc_info.value)

    def test_remove_returns_new_registry(self, registry):
        updated = registry.remove("date", "ymd_dashes")

        assert updated.names("date") == ()
        assert registry.names("date") == ("ymd_dashes",)

    def test_remove_unknown_raises(self, registry):
        with pytest.raises(KeyError):
            registry.remove("date", "__missing__")

    def test_get_unknown_raises(self, registry):
        with pytest.raises(KeyError):
            registry.get(FormatCategory.TIME, "hhnn")

    def test_unknown_category_raises(self, registry):
        with pytest.raises(ValueError):
            registry.definitions("week")


@pytest.mark.unit
class TestCompose:
    def test_compose_places_date_then_time_slots(self, ymd_dashes):
        time_format = FormatDefinition(
            "hnn_ampm",
            re.compile(r"(\d{1,2}):(\d{2})\s?((?:a|p)\.?m\.?)", re.IGNORECASE),
            get_extractor("hn_meridian"),
        )
        combined = compose(ymd_dashes, time_format, r"\s")

        match = combined.pattern.fullmatch("2023-01-15 2:30PM")
        assert match is not None
        assert combined.extract(match.groups()) == [2023, 1, 15, 14, 30, 0]
        assert combined.name == "ymd_dashes_hnn_ampm"
        assert combined.pattern.flags & re.IGNORECASE

    def test_compose_pads_short_time_and_ignores_suffix_groups(self, ymd_dashes):
        hhnn = FormatDefinition("hhnn", r"(\d{2}):(\d{2})")
        combined = compose(
            ymd_dashes, hhnn, "T", name="iso_short", suffix=r"(?:Z|[-+](\d{2}):(\d{2}))?"
        )

        match = combined.pattern.fullmatch("2023-01-15T14:30+05:00")
        assert match is not None
        assert combined.extract(match.groups()) == [2023, 1, 15, 14, 30, None]

    def test_registry_compose_registers_datetime_format(self, registry):
        registry = registry.register("time", "hhnn", r"(\d{2}):(\d{2})")

        updated = registry.compose("ymd_hhnn", "ymd_dashes", "hhnn", r"\s")

        assert updated.names("datetime") == ("ymd_hhnn",)
        assert registry.names("datetime") == ()


@pytest.mark.unit
class TestDefaultRegistry:
    def test_default_categories_are_populated(self):
        stats = build_default_registry().get_statistics()
        assert stats == {"time": 11, "date": 13, "datetime": 3}

    def test_dotted_and_slashed_year_first_dates_are_both_reachable(self):
        names = build_default_registry().names("date")
        assert "yyyymmdd_slashes" in names
        assert "yyyymmdd_dots" in names
        assert len(names) == len(set(names))

    def test_priority_order_is_registration_order(self):
        names = build_default_registry().names("time")
        assert names[0] == "hhnnss_colons"
        assert names[-1] == "h_ampm"
