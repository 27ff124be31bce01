"""Pytest configuration and fixtures."""

import pytest

from objscope import NullAccessor, StrategyRegistry, reset_registry, set_registry
from objscope.config import TestSettings, reset_settings, set_settings
from tests.fixtures.object_fixtures import RecordingAccessor


@pytest.fixture(autouse=True)
def inspector_settings(monkeypatch):
    """Install test settings and drop them afterwards."""
    monkeypatch.setenv("OBJSCOPE_DISABLE_CONSOLE_LOGGING", "1")
    settings = TestSettings()
    set_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture
def registry():
    """Provide a fresh registry installed as the process-wide instance."""
    fresh = StrategyRegistry()
    set_registry(fresh)
    yield fresh
    reset_registry()


@pytest.fixture
def accessor() -> NullAccessor:
    return NullAccessor()


@pytest.fixture
def recording_accessor() -> RecordingAccessor:
    return RecordingAccessor()
