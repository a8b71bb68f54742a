"""Unit tests for the named extractor catalog."""

import pytest

from timeliness.infrastructure.formats import extractor, get_extractor, list_extractors


@pytest.mark.unit
class TestExtractorCatalog:
    def test_builtin_extractors_registered(self):
        names = {spec.name for spec in list_extractors()}
        assert {"ymd", "mdy", "dmy", "hn_meridian", "h_meridian"} <= names

    def test_month_first_binds_threshold(self):
        assert get_extractor("mdy")("1", "15", "23") == [2023, 1, 15]
        assert get_extractor("mdy", 20)("1", "15", "23") == [1923, 1, 15]

    def test_day_first_accepts_month_names(self):
        assert get_extractor("dmy")("15", "Jan", "2023") == [2023, 1, 15]
        assert get_extractor("dmy")("3", "september", "99") == [1999, 9, 3]

    def test_meridian_extractors(self):
        assert get_extractor("hn_meridian")("2", "30", "p.m.") == [14, 30, 0]
        assert get_extractor("h_meridian")("12", "AM") == [0, 0, 0]

    def test_unknown_extractor_raises(self):
        with pytest.raises(KeyError) as exc_info:
            get_extractor("__missing__")
        assert "not registered" in str(exc_info.value)

    def test_duplicate_registration_rejected(self):
        with pytest.raises(ValueError):
            extractor(name="ymd", description="duplicate")(lambda y, m, d: [y, m, d])

    def test_unknown_month_name_raises(self):
        with pytest.raises(ValueError):
            get_extractor("dmy")("15", "Foo", "2023")
