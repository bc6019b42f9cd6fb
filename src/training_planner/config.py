"""Configuration settings for the Training Planner."""

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/training_planner/config.py
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:4321", "http://127.0.0.1:4321"]

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""

    # Shared secret for admin-only query options (training types listing)
    internal_admin_token: str = ""

    # Client side: where the onboarding/goal clients send requests
    api_base_url: str = "http://localhost:8000"
    onboarding_next_url: str = "/calendar"
    request_timeout_s: float = 30.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
