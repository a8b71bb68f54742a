"""
Configuration management for Timeliness.

This module provides environment-based configuration using Pydantic BaseSettings.
Settings control the defaults used when the process-wide format registry is
built: the two-digit year threshold, the default value type and an optional
YAML file with custom formats.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("TIMELINESS_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class TimelinessSettings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are automatically loaded with the TIMELINESS_ prefix.
    For example, TIMELINESS_TWO_DIGIT_YEAR_THRESHOLD=50 makes "49" parse as
    2049 and "50" as 1950.
    """

    log_level: str = Field(default="INFO", description="Logging level")

    two_digit_year_threshold: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Two-digit years below this value are placed in the 2000s",
    )

    default_type: Literal["time", "date", "datetime"] = Field(
        default="datetime",
        description="Value type used when a validator does not name one",
    )

    formats_file: Optional[Path] = Field(
        default=None,
        description="YAML file with custom formats applied on top of the defaults",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    model_config = SettingsConfigDict(
        env_prefix="TIMELINESS_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> TimelinessSettings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded once and reused across
    the application lifecycle. Tests that change environment variables should
    call ``get_settings.cache_clear()``.

    Returns:
        TimelinessSettings instance with loaded configuration
    """
    return TimelinessSettings()
