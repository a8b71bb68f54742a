"""Unit tests for environment-based settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from timeliness.config import TimelinessSettings, get_settings


@pytest.mark.unit
class TestTimelinessSettings:
    def test_defaults(self):
        settings = TimelinessSettings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.two_digit_year_threshold == 30
        assert settings.default_type == "datetime"
        assert settings.formats_file is None

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TIMELINESS_LOG_LEVEL", "debug")
        monkeypatch.setenv("TIMELINESS_TWO_DIGIT_YEAR_THRESHOLD", "50")
        monkeypatch.setenv("TIMELINESS_DEFAULT_TYPE", "date")
        monkeypatch.setenv("TIMELINESS_FORMATS_FILE", str(tmp_path / "formats.yml"))

        settings = TimelinessSettings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.two_digit_year_threshold == 50
        assert settings.default_type == "date"
        assert settings.formats_file == Path(tmp_path / "formats.yml")

    def test_env_file_is_read(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TIMELINESS_TWO_DIGIT_YEAR_THRESHOLD=70\n", encoding="utf-8")

        settings = TimelinessSettings(_env_file=str(env_file))

        assert settings.two_digit_year_threshold == 70

    @pytest.mark.parametrize(
        "name,value",
        [
            ("TIMELINESS_TWO_DIGIT_YEAR_THRESHOLD", "101"),
            ("TIMELINESS_TWO_DIGIT_YEAR_THRESHOLD", "-1"),
            ("TIMELINESS_DEFAULT_TYPE", "week"),
        ],
    )
    def test_invalid_values_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ValidationError):
            TimelinessSettings(_env_file=None)

    def test_get_settings_is_cached(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("TIMELINESS_TWO_DIGIT_YEAR_THRESHOLD", "60")

        assert get_settings() is first

        get_settings.cache_clear()
        assert get_settings().two_digit_year_threshold == 60
