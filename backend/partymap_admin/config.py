"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "PartyMap Admin"
    app_env: str = "development"  # development, staging, production
    debug: bool = True
    log_level: str = "INFO"

    # Backend API
    backend_url: str = "https://api.partymap.app"
    backend_url_dev: str = "http://localhost:5000"
    request_timeout_seconds: float = 10.0

    # Pre-issued admin token (optional, e.g. for scripts)
    admin_token: Optional[str] = None

    # List views
    search_debounce_ms: int = 500
    default_page_size: int = 10
    max_page_size: int = 1000

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def api_base_url(self) -> str:
        """Base URL for all REST calls (production or dev backend)."""
        base = self.backend_url if self.is_production else self.backend_url_dev
        return base.rstrip("/") + "/api"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
