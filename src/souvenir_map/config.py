"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Backend settings loaded from environment variables."""

    supabase_url: str
    supabase_anon_key: str
    supabase_service_key: str
    elevenlabs_api_key: str | None = None
    elevenlabs_model_id: str = "scribe_v1"
    elevenlabs_base_url: str = "https://api.elevenlabs.io/v1"
    nodely_api_token: str | None = None
    algorand_node_url: str = "https://testnet-api.4160.nodely.io"
    algorand_mnemonic: str | None = None
    cors_allow_origins: str = "*"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


class ClientSettings(BaseSettings):
    """Client settings; holds only public values."""

    backend_base_url: str
    supabase_url: str
    supabase_anon_key: str
    openai_api_key: str | None = None
    openai_image_model: str = "gpt-image-1"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse the CORS origin list from env."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    origins = [chunk.strip() for chunk in cleaned.split(",")]
    return [origin for origin in origins if origin] or ["*"]
