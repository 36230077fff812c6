"""Pytest configuration and shared fixtures."""

import pytest

from edgefinder.config import reset_config
from edgefinder.ingestion.cache import get_cache


@pytest.fixture(autouse=True)
def fresh_state():
    """
    Reload configuration and empty the response cache around every test.

    Config is a process-wide singleton, so tests that monkeypatch the
    environment would otherwise leak settings into later tests.
    """
    reset_config()
    get_cache().clear()
    yield
    reset_config()
    get_cache().clear()

