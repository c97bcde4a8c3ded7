"""
Configuration and settings for the relay backend.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# functions/public, next to the package.
DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent / "public"


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_prefix: str = Field(default="/api")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)
    static_dir: str = Field(default=str(DEFAULT_STATIC_DIR))
    cors_origins: str = Field(default="*")
    log_level: str = Field(default="INFO")

    # LLM / OpenAI
    openai_api_key: Optional[str] = Field(default=None)
    openai_model: str = Field(default="gpt-4o")
    openai_api_url: str = Field(
        default="https://api.openai.com/v1/chat/completions"
    )

    # OneSignal
    onesignal_api_key: Optional[str] = Field(default=None)
    onesignal_app_id: Optional[str] = Field(default=None)
    onesignal_api_url: str = Field(
        default="https://onesignal.com/api/v1/notifications"
    )

    # Replicate
    replicate_api_token: Optional[str] = Field(default=None)
    replicate_model_version: str = Field(
        default="e3d8c079a7424ad2bfa31bb6d56a5eb2"
    )
    replicate_api_url: str = Field(
        default="https://api.replicate.com/v1/predictions"
    )

    # Firestore collection holding user documents (pushToken, plan).
    users_collection: str = Field(default="usuarios")

    # None means outbound calls wait indefinitely.
    upstream_timeout_seconds: Optional[float] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, validation_alias="RELAY_USE_IN_MEMORY_BACKENDS"
    )

    @property
    def cors_origin_list(self) -> list[str]:
        raw = (self.cors_origins or "").strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
