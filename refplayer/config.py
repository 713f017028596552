"""
Configuration management for the channel catalog service.
Uses pydantic-settings for environment variable loading.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    app_name: str = "Cast Reference Player Catalog"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS Configuration
    cors_origins: list[str] = ["*"]

    # Rate Limiting
    load_rate_limit_per_minute: int = 10

    # Catalog Sources
    catalog_url: str = "file:///android_asset/channels.json"
    asset_url_prefix: str = "file:///android_asset/"
    asset_root: str = "assets"

    # Fetch Configuration
    fetch_timeout_seconds: float = 30.0

    # Build the catalog during application startup
    load_on_startup: bool = True

    # Admin API key for protected endpoints
    admin_api_key: str = "dev-admin-key"

    # Pydantic V2 configuration
    model_config = SettingsConfigDict(env_prefix="REFPLAYER_", env_file=".env")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
