"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (required - must be set in .env or environment)
    database_url: str
    init_db_on_startup: bool = True

    # Upload handling
    max_upload_bytes: int = 10 * 1024 * 1024

    # Extraction
    currency_symbol: str = "₡"
    # Let later vendor rules try when a detected vendor's price label is missing
    fallback_on_unparseable: bool = False

    cors_origins: list[str] = ["*"]

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Debug flags
    sql_debug: bool = False
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()
