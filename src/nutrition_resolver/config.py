"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    fdc_api_key: str | None = None
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_timeout_seconds: float = 15.0
    fdc_page_size: int = 10
    admin_token: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_api_key(raw: str | None) -> str | None:
    """Return the API key, treating blank values as unset."""
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None
