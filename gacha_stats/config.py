"""Application configuration using Pydantic Settings."""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    APP_NAME: str = "Gacha Stats"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Path | None = None

    # Analytics
    STREAK_WINDOW_HOURS: int = 24

    # Caches
    PRETTIZED_CACHE_SIZE: int = 32
    ITEM_NAME_CACHE_SIZE: int = 4096


settings = Settings()
