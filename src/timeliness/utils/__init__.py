"""Shared utilities."""

from timeliness.utils.logging import bind_context, get_logger

__all__ = ["bind_context", "get_logger"]
