"""Structured logging framework using structlog.

This module provides centralized logging configuration with:
- ISO-8601 timestamps
- JSON rendering for structured logs
- Context binding support

Configuration is loaded from timeliness.config.settings:
- TIMELINESS_LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR). Default: INFO

Usage:
    >>> from timeliness.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("format_replaced", category="date", name="iso")
"""

import logging
import os
from typing import Any

import structlog
from structlog.types import Processor

from timeliness.config import get_settings


def _get_log_level() -> int:
    """Get log level from settings.

    Falls back to the TIMELINESS_LOG_LEVEL environment variable when the
    settings cannot be loaded (for example a malformed .env file).

    Returns:
        Logging level constant (e.g., logging.INFO, logging.DEBUG)
    """
    try:
        level_name = get_settings().log_level.upper()
    except ValueError:
        level_name = os.getenv("TIMELINESS_LOG_LEVEL", "INFO").upper()

    return getattr(logging, level_name, logging.INFO)


def _configure_structlog() -> None:
    """Configure structlog with JSON rendering on top of stdlib logging."""
    logging.basicConfig(
        format="%(message)s",
        level=_get_log_level(),
        handlers=[],
    )

    stdout_handler = logging.StreamHandler()
    stdout_handler.setLevel(_get_log_level())
    logging.root.addHandler(stdout_handler)

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger configured with JSON rendering

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("parse_failed", raw_value="2023-02-30", kind="calendar_error")
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Useful for attaching the validated attribute or value type to every event
    emitted while validating one record.

    Example:
        >>> logger = bind_context(attribute="birth_date", type="date")
        >>> logger.debug("restriction_violated", operator="before")
    """
    return structlog.get_logger().bind(**kwargs)
