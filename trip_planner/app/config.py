"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Planner backend (trips, itinerary, activity catalog)
    planner_api_url: str = "http://localhost:4000/api"
    planner_api_token: str = ""

    # Timeouts (seconds)
    request_timeout_s: float = 10.0

    # UI
    ui_origin: str = "http://localhost:5173"

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
