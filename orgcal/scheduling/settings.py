"""
Settings and configuration for the Scheduling Service.
"""

from typing import Optional

from orgcal.common.settings import (
    AliasChoices,
    BaseSettings,
    SettingsConfigDict,
    field,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    db_url_scheduling: str = field(
        default=...,
        description="Database connection string for the scheduling service",
        validation_alias=AliasChoices("DB_URL_SCHEDULING"),
    )

    db_echo: bool = field(
        default=False,
        description="Echo SQL statements to the log",
        validation_alias=AliasChoices("DB_ECHO"),
    )

    lock_timeout_seconds: float = field(
        default=10.0,
        description="Maximum wait for a calendar's booking lock",
        validation_alias=AliasChoices("SCHEDULING_LOCK_TIMEOUT"),
    )

    # Logging configuration
    log_level: str = field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias=AliasChoices("LOG_LEVEL"),
    )
    log_format: str = field(
        default="json",
        description="Log format (json or text)",
        validation_alias=AliasChoices("LOG_FORMAT"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
