"""Configuration management for objscope using pydantic-settings.

Settings are read from environment variables (``OBJSCOPE_`` prefix) and an
optional ``.env`` file, with type validation.
"""

import os
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class InspectorSettings(BaseSettings):
    """Main configuration settings for objscope."""

    model_config = SettingsConfigDict(
        env_prefix="OBJSCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Formatting settings
    float_precision: int = Field(4, ge=0, le=17, description="Decimal places for float values")
    max_string_length: int = Field(
        500, ge=1, description="Strings longer than this are truncated with '...'"
    )
    handle_discriminator_length: int = Field(
        8, ge=1, description="Maximum characters of a handle identifier shown in values"
    )

    # Collection settings
    collection_preview_limit: int = Field(
        100, ge=1, description="Items counted before a collection summary reports 'N+'"
    )
    max_children: int = Field(
        1000, ge=1, description="Maximum child nodes created by one tree expansion"
    )

    # Logging settings
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field("INFO", description="Log level when debug mode is off")
    log_file: Path | None = Field(None, description="Optional log file path")

    @model_validator(mode="after")
    def validate_log_level(self) -> "InspectorSettings":
        """Normalize and validate the log level name."""
        level = self.log_level.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {self.log_level}")
        self.log_level = level
        return self

    @property
    def effective_log_level(self) -> str:
        """Log level after applying debug mode."""
        return "DEBUG" if self.debug_mode else self.log_level


class TestSettings(InspectorSettings):
    """Test-specific settings."""

    __test__ = False

    model_config = SettingsConfigDict(env_prefix="OBJSCOPE_", env_file=".env.test", extra="ignore")

    debug_mode: bool = True
    max_children: int = 50


# Singleton instance
_settings: InspectorSettings | None = None


def get_settings(env: str | None = None) -> InspectorSettings:
    """Get the singleton settings instance.

    Args:
        env: Environment name ('test' selects TestSettings)

    Returns:
        InspectorSettings instance
    """
    global _settings

    if _settings is None:
        env_name = env or os.getenv("OBJSCOPE_ENV", "default")
        if env_name == "test":
            _settings = TestSettings()
        else:
            _settings = InspectorSettings()

    return _settings


def set_settings(settings: InspectorSettings) -> None:
    """Replace the singleton settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
