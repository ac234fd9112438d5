"""Runtime settings and logging setup."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.logging import RichHandler


class Settings(BaseSettings):
    """
    Settings read from the environment (prefix ``SCHEDULO_``) or a ``.env`` file.

    Example:
        SCHEDULO_LOG_LEVEL=DEBUG SCHEDULO_DEFAULT_DAYS=6 python -m schedulo generate input.json
    """
    model_config = SettingsConfigDict(
        env_prefix="SCHEDULO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"
    default_days: int = Field(default=5, ge=1)
    default_periods_per_day: int = Field(default=6, ge=1)
    single_session_per_period: bool = False
    json_indent: int = Field(default=2, ge=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Route the ``schedulo`` loggers through rich at the given level."""
    level = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
