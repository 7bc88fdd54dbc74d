"""Configuration management."""

from .settings import (
    Settings,
    get_settings,
    reload_settings,
    LogLevel,
    DataProvider,
    SplitMethod,
)

__all__ = [
    "Settings",
    "get_settings",
    "reload_settings",
    "LogLevel",
    "DataProvider",
    "SplitMethod",
]
