"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    recommendation_api_url: str
    recipe_api_key: str
    recipe_api_url: str = "https://keto-diet.p.rapidapi.com"
    recipe_api_host: str = "keto-diet.p.rapidapi.com"
    supabase_url: str
    supabase_service_key: str
    admin_token: str
    default_user_email: str = "alex@example.com"
    recommendation_cache_ttl_seconds: int = 1800
    recommendation_cache_max_entries: int | None = 1024
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
