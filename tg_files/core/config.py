"""
Application configuration using Pydantic Settings.

Centralizes all configuration with environment variable support.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Telegram
    telegram_bot_token: str = ""
    telegram_api_root: str = "https://api.telegram.org"
    telegram_environment: Literal["prod", "test"] = "prod"

    # Transfers
    download_timeout: float = 60.0
    download_chunk_size: int = 64 * 1024

    # Working directories (None = system temp dir)
    temp_dir: Optional[str] = None

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
