"""Configuration management for Timeliness.

Usage:
    >>> from timeliness.config import get_settings
    >>> settings = get_settings()
    >>> settings.two_digit_year_threshold
    30
"""

from timeliness.config.settings import TimelinessSettings, get_settings

__all__ = [
    "TimelinessSettings",
    "get_settings",
]
