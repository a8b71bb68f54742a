"""Unit tests for structured logging helpers."""

import json
import logging

import pytest

from timeliness.config import get_settings
from timeliness.utils.logging import _get_log_level, bind_context, get_logger


@pytest.mark.unit
class TestStructuredLogging:
    def test_events_rendered_as_json(self, caplog):
        caplog.set_level(logging.INFO)

        get_logger("timeliness.sample").info("sample_event", answer=42)

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "sample_event"
        assert payload["answer"] == 42
        assert payload["level"] == "info"
        assert payload["logger"] == "timeliness.sample"
        assert "timestamp" in payload

    def test_bind_context_fields_included(self, caplog):
        caplog.set_level(logging.INFO)

        bind_context(attribute="starts_on", type="date").info("bound_event")

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["attribute"] == "starts_on"
        assert payload["type"] == "date"

    def test_log_level_from_settings(self, monkeypatch):
        monkeypatch.setenv("TIMELINESS_LOG_LEVEL", "debug")
        get_settings.cache_clear()

        assert _get_log_level() == logging.DEBUG

    def test_unknown_log_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("TIMELINESS_LOG_LEVEL", "chatty")
        get_settings.cache_clear()

        assert _get_log_level() == logging.INFO
