"""
Configuration Management for LifeHub

Every knob is read from LIFEHUB_* environment variables through pydantic-settings.

DESIGN DECISION: Configuration lives in this one module.
Everything is optional with a sensible default, so the app starts
with no environment at all and a `.env` file only overrides.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where and how the Store snapshot is persisted."""

    model_config = SettingsConfigDict(
        env_prefix="LIFEHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the persisted snapshot"
    )
    storage_key: str = Field(
        default="lifehub.v2",
        min_length=1,
        description="Versioned identifier the snapshot is saved under"
    )
    save_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed write is attempted"
    )

    @field_validator("storage_key")
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """The key becomes a file name, so path separators are not allowed."""
        if "/" in v or "\\" in v:
            raise ValueError(f"storage_key must not contain path separators: {v}")
        return v

    @property
    def snapshot_path(self) -> Path:
        """Full path of the JSON snapshot file."""
        return self.data_dir / f"{self.storage_key}.json"


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LIFEHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum level that is emitted"
    )
    json_logs: bool = Field(
        default=False,
        description="Render log lines as JSON instead of console text"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class TrackerSettings(BaseSettings):
    """Behavioural knobs of the tracker itself."""

    model_config = SettingsConfigDict(
        env_prefix="LIFEHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    quick_add_note: str = Field(
        default="Quick add",
        description="Note attached to transactions created by quick add"
    )
    currency_symbol: str = Field(
        default="£",
        max_length=3,
        description="Symbol used when formatting money for display"
    )
    future_date_tolerance_days: int = Field(
        default=1,
        ge=0,
        description="How many days ahead a transaction can be dated before it is flagged"
    )


class Settings(BaseSettings):
    """
    Entry point to every settings section.

    Each property reads its section fresh from the environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @property
    def tracker(self) -> TrackerSettings:
        return TrackerSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    The process-wide Settings instance.

    Tests call get_settings.cache_clear() after changing the environment.
    """
    return Settings()
