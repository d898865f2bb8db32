"""Client configuration via environment variables and .env."""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

DEFAULT_API_URL = "http://10.0.2.2:5000/api"
DEFAULT_STORAGE_PATH = Path.home() / ".vendor-client" / "storage.db"


class Settings(BaseSettings):
    # Vendor backend
    api_url: str = Field(
        default=DEFAULT_API_URL,
        validation_alias=AliasChoices("vendor_api_url", "expo_public_api_url"),
    )
    request_timeout: float = Field(
        default=10.0, validation_alias=AliasChoices("vendor_request_timeout")
    )

    # Local token storage
    storage_path: Path = Field(
        default=DEFAULT_STORAGE_PATH, validation_alias=AliasChoices("vendor_storage_path")
    )

    # Google Maps
    google_maps_api_key: str | None = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
