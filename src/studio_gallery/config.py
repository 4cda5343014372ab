"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    session_store_path: str | None = None
    access_grant_ttl_hours: int = 24
    session_id_prefix: str = "session_"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_client_id(raw: str | None) -> str:
    """Normalize the client id header into a storage namespace."""
    if raw is None:
        return "anonymous"
    cleaned = raw.strip()
    if not cleaned or ":" in cleaned:
        return "anonymous"
    return cleaned[:128]
