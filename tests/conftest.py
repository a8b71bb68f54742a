"""Pytest configuration shared by all test suites.

Every test starts from default settings: TIMELINESS_* variables from the
developer's environment are removed and the cached settings and default
registry are rebuilt around each test.
"""

from __future__ import annotations

import os
from typing import Generator

import pytest

from timeliness.config import get_settings
from timeliness.infrastructure.parsing.parser import get_default_registry


def _clear_caches() -> None:
    get_settings.cache_clear()
    get_default_registry.cache_clear()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for name in list(os.environ):
        if name.startswith("TIMELINESS_"):
            monkeypatch.delenv(name, raising=False)
    _clear_caches()
    yield
    _clear_caches()
