"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from food_score.adapters.taxonomy_client import DEFAULT_TAXONOMY_URL

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_token: str
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    taxonomy_url: str = DEFAULT_TAXONOMY_URL
    taxonomy_cache_ttl_seconds: int = 7 * 24 * 60 * 60
    taxonomy_timeout_seconds: float = 15.0
    memory_backfill_ttl_seconds: int = 60 * 60
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)
