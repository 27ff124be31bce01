"""Tests for InspectorSettings and the settings singleton."""

import pytest
from pydantic import ValidationError

from objscope.config import (
    InspectorSettings,
    TestSettings,
    get_settings,
    reset_settings,
    set_settings,
)


class TestInspectorSettings:
    """Test defaults, environment overrides and validation."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("OBJSCOPE_FLOAT_PRECISION", raising=False)
        settings = InspectorSettings(_env_file=None)

        assert settings.float_precision == 4
        assert settings.max_string_length == 500
        assert settings.handle_discriminator_length == 8
        assert settings.collection_preview_limit == 100
        assert settings.max_children == 1000
        assert settings.log_file is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("OBJSCOPE_FLOAT_PRECISION", "2")
        monkeypatch.setenv("OBJSCOPE_MAX_CHILDREN", "10")

        settings = InspectorSettings(_env_file=None)

        assert settings.float_precision == 2
        assert settings.max_children == 10

    def test_log_level_is_normalized(self):
        assert InspectorSettings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            InspectorSettings(_env_file=None, log_level="chatty")

    def test_negative_precision_rejected(self):
        with pytest.raises(ValidationError):
            InspectorSettings(_env_file=None, float_precision=-1)

    def test_debug_mode_overrides_log_level(self):
        settings = InspectorSettings(_env_file=None, debug_mode=True, log_level="ERROR")

        assert settings.effective_log_level == "DEBUG"


class TestSettingsSingleton:
    """Test get/set/reset of the process-wide settings."""

    def test_set_settings_is_returned(self):
        custom = InspectorSettings(_env_file=None, float_precision=1)
        set_settings(custom)

        assert get_settings() is custom

    def test_reset_then_get_builds_once(self, monkeypatch):
        monkeypatch.delenv("OBJSCOPE_ENV", raising=False)
        reset_settings()

        first = get_settings()

        assert get_settings() is first
        assert not isinstance(first, TestSettings)

    def test_test_environment(self):
        reset_settings()

        settings = get_settings(env="test")

        assert isinstance(settings, TestSettings)
        assert settings.max_children == 50
