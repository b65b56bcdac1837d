"""
Centralized configuration using Pydantic BaseSettings.
Ranking constants and storage location are read from the environment.
"""
from functools import lru_cache
from typing import Optional, Union

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "YT Ratio Rankings"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Telemetry
    ENABLE_OTEL: bool = False
    ENABLE_PROMETHEUS: bool = True

    # Rankings
    RANKING_LOWEST_VIEW_COUNT: Union[int, float] = 100  # Floor of the first ranking
    RANKING_STEP: Union[int, float] = 10  # Factor between two rankings
    RANKING_MAX_VIDEOS: int = 10  # Retention cap per ranking

    # Storage
    STORAGE_NAMESPACE: str = "us-yt-ratio"
    STORAGE_PATH: Optional[str] = None  # None keeps records in memory only

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance - singleton pattern."""
    return Settings()
