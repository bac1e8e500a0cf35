"""
Application configuration from environment.
Menu API location and token, display constants and admin JWT verification.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # External menu API (collection endpoint; items live at {menu_api_url}/{id})
    menu_api_url: str = "http://localhost:3000/api/menu"
    menu_api_token: Optional[str] = None

    # Display
    landing_page_slot_limit: int = 6  # shown only, never enforced
    currency_symbol: str = "Rp"

    # JWT (tokens are issued elsewhere with the shared secret)
    jwt_secret_key: str = "change-me-in-production-min-32-chars"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 30

    # Observability
    sentry_dsn: Optional[str] = None
    app_env: str = "development"
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"

    # Timeouts (seconds); same as the httpx default
    menu_request_timeout: float = 5.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
