"""Environment-based configuration using pydantic-settings.

Provides type-safe, immutable configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from oplog.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.context_field_name
    '_contextId'
    >>> settings.remote.severity_level
    'INFO'

    # Or with environment variables:
    # OPLOG_USE_REMOTE=true
    # OPLOG_REMOTE_SEVERITY_LEVEL=WARN
    # OPLOG_REMOTE_CREDENTIALS_PATH=/etc/gcp/service-account.json
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONTEXT_FIELD = "_contextId"

LevelName = Literal["TRACE", "DEBUG", "INFO", "WARN", "ERROR", "FATAL"]


class RemoteSettings(BaseSettings):
    """Google Cloud Logging sink configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OPLOG_REMOTE_",
        extra="ignore",
        frozen=True,
    )

    # Matched case-sensitively against Severity names; unknown names disable the sink
    severity_level: str = Field(default="INFO", description="Minimum severity sent to Cloud Logging")
    credentials_path: str | None = Field(default=None, description="Service account JSON key file")
    project_id: str | None = Field(default=None, description="GCP project receiving log entries")


class LocalSettings(BaseSettings):
    """Local (stdlib logging) sink configuration used by configure_logging()."""

    model_config = SettingsConfigDict(
        env_prefix="OPLOG_LOCAL_",
        extra="ignore",
        frozen=True,
    )

    level: LevelName = "INFO"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _lower_format(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v


class OplogSettings(BaseSettings):
    """Root settings.

    Loads configuration from environment variables with OPLOG_ prefix.
    Instances are frozen: pass one explicitly to Logger for isolation,
    or rely on the cached get_settings().

    Example environment variables:
        OPLOG_USE_REMOTE=true
        OPLOG_CONTEXT_FIELD_NAME=requestId
        OPLOG_REMOTE_SEVERITY_LEVEL=WARN
        OPLOG_REMOTE_PROJECT_ID=my-project
        OPLOG_LOCAL_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="OPLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
        frozen=True,
    )

    use_remote: bool = Field(default=False, description="Send logs to Google Cloud Logging")
    context_field_name: str = Field(default=DEFAULT_CONTEXT_FIELD, description="Correlation id field name")

    remote: RemoteSettings = Field(default_factory=RemoteSettings)
    local: LocalSettings = Field(default_factory=LocalSettings)

    @field_validator("context_field_name", mode="before")
    @classmethod
    def _default_context_field(cls, v: object) -> object:
        """Blank or missing names fall back to the default."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CONTEXT_FIELD
        return v

    @computed_field
    @property
    def backend(self) -> Literal["local", "cloud"]:
        """Which adapter create_adapter() will build."""
        return "cloud" if self.use_remote else "local"


# Singleton pattern for settings
@lru_cache(maxsize=1)
def get_settings() -> OplogSettings:
    """Get the global settings instance (cached).

    Returns:
        Cached OplogSettings instance
    """
    return OplogSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
