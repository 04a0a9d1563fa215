"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    DEFAULT_CONTEXT_FIELD,
    LocalSettings,
    OplogSettings,
    RemoteSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "DEFAULT_CONTEXT_FIELD",
    "LocalSettings",
    "OplogSettings",
    "RemoteSettings",
    "clear_settings_cache",
    "get_settings",
]
