"""Environment-driven settings for vslocal.

There is no config file; everything comes from ``VSLOCAL_*``
environment variables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class VSLocalSettings(BaseSettings):
    """Runtime settings."""
    log_level: str = Field(default="INFO", description="Level for the log file")
    console_log_level: Optional[str] = Field(
        default=None,
        description="Also log to stderr at this level (unset = no console logging)",
    )
    logs_dir: Optional[Path] = Field(default=None, description="Directory for the rotating log file")
    log_file: str = Field(default="vslocal.log", description="Log file name inside logs_dir")
    no_color: bool = Field(default=False, description="Disable colored console output")

    model_config = SettingsConfigDict(env_prefix="VSLOCAL_", extra="ignore")

    @field_validator("log_level", "console_log_level")
    @classmethod
    def _check_level(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_settings() -> VSLocalSettings:
    """Read settings from the current environment."""
    return VSLocalSettings()
