"""Configuration for objscope."""

from .settings import InspectorSettings, TestSettings, get_settings, reset_settings, set_settings

__all__ = [
    "InspectorSettings",
    "TestSettings",
    "get_settings",
    "reset_settings",
    "set_settings",
]
