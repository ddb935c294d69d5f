"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import API_BASE, DEFAULT_MAX_IN_FLIGHT, DEFAULT_RATE_LIMIT, DEFAULT_RATE_WINDOW


class Settings(BaseSettings):
    """Settings for the issue snapshot fetcher."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: str | None = None
    github_api_url: str = API_BASE

    # Admission throttle and concurrency ceiling for pull request lookups
    fetch_rate_limit: int = DEFAULT_RATE_LIMIT
    fetch_rate_window: float = DEFAULT_RATE_WINDOW
    fetch_max_in_flight: int = DEFAULT_MAX_IN_FLIGHT
    # None retries rate-limited requests until the server lets them through
    fetch_max_attempts: int | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
