from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    This uses pydantic-settings so that we get type validation and defaults.
    Settings are loaded from environment variables with optional .env file override.
    """

    # App basics
    ENV: Literal["development", "staging", "production"] = "development"
    """Environment mode: affects the log renderer."""

    DEBUG: bool = False
    """Enable debug mode: lowers the log level to DEBUG."""

    LOG_LEVEL: str = "INFO"
    """Log level name used when DEBUG is off."""

    # Conversion overrides
    CONVERSION_TRANSFER_MARKERS: list[str] = ["P2P SDBO", "P2P_SDBO"]
    """Substrings of transDetails that mark an internal transfer leg."""

    CONVERSION_CASH_TRANSACTION_TYPES: list[str] = ["ATM", "Cash"]
    """Detail types that are reclassified as cash transfers."""

    # Model config
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    def effective_log_level(self) -> str:
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance to avoid re-parsing .env repeatedly."""
    return Settings()
