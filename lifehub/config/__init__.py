"""Configuration package."""

from lifehub.config.settings import (
    LoggingSettings,
    Settings,
    StorageSettings,
    TrackerSettings,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "Settings",
    "StorageSettings",
    "TrackerSettings",
    "get_settings",
]
