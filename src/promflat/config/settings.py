"""
Application settings using Pydantic.

Provides environment-based configuration loading with PROMFLAT_ prefix.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from promflat import __version__


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROMFLAT_",
        extra="ignore",
    )

    # HTTP client settings
    http_timeout: float = 10.0
    user_agent: str = f"promflat/{__version__}"

    # Logging
    log_level: str = "WARNING"
    log_format: Literal["json", "console"] = "console"

    # Scrape target used when the CLI gets no URL argument
    default_url: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
