"""Runner settings."""

from __future__ import annotations

import os
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class Settings(BaseSettings):
    """Runner settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info", alias="TRIALRUN_LOG_LEVEL")
    debug: bool = Field(default=False, alias="TRIALRUN_DEBUG")

    # Reporting
    show_skipped: bool = Field(default=True, alias="TRIALRUN_SHOW_SKIPPED")
    output_format: Literal["table", "json"] = Field(
        default="table",
        alias="TRIALRUN_OUTPUT_FORMAT",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        v = v.strip().lower()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return v


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    YAML config files (~/.trialrun/config.yaml, then the nearest
    .trialrun/config.yaml) are folded into the environment first;
    variables that are already set take precedence.
    """
    global _settings
    if _settings is None:
        from trialrun.config_loader import ConfigLoader

        for key, value in ConfigLoader().to_env_vars().items():
            if key not in os.environ:
                os.environ[key] = value

        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them."""
    global _settings
    _settings = None
