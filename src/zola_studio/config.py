"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_anon_key: str
    site_url: str = "http://localhost:5173"
    client_dist_path: str = "dist/client"
    flag_store_path: str = ".zola_studio/flags.json"
    tour_delay_seconds: float = 0.5
    signed_url_ttl_seconds: int = 3600
    generated_assets_table: str = "generated_assets"
    generated_assets_bucket: str = "generated-assets"
    collection_assets_table: str = "asset_collection"
    collection_assets_bucket: str = "asset-collection"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
