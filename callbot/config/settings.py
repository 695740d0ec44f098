"""
Configuration management for Callbot.
Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseSettings):
    """Location of the action catalog file."""

    path: str = "callbot.toml"
    strict: bool = False

    model_config = SettingsConfigDict(env_prefix="CALLBOT_CATALOG_")


class RunnerSettings(BaseSettings):
    """Process runner configuration."""

    shell: str = "/bin/sh"
    force_dry_run: bool = False

    model_config = SettingsConfigDict(env_prefix="CALLBOT_RUNNER_")


class StateSettings(BaseSettings):
    """Persistence of last-used argument values."""

    last_used_path: str = "data/last_used.json"
    enabled: bool = True

    model_config = SettingsConfigDict(env_prefix="CALLBOT_STATE_")


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: str = "INFO"
    file_path: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="CALLBOT_LOG_")


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    app_name: str = "Callbot"
    app_version: str = "0.3.0"

    # Sub-configurations
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    runner: RunnerSettings = Field(default_factory=RunnerSettings)
    state: StateSettings = Field(default_factory=StateSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="CALLBOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
