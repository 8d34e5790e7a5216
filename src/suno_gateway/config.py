"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from suno_gateway.domain.clips import DEFAULT_MODEL

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    suno_cookie: str = ""
    suno_base_url: str = "https://studio-api.prod.suno.com"
    clerk_base_url: str = "https://clerk.suno.com"
    jsdelivr_base_url: str = "https://data.jsdelivr.com"
    default_model: str = DEFAULT_MODEL
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def has_cookie(self) -> bool:
        """Return true when a raw Suno cookie was supplied."""
        return bool(self.suno_cookie.strip())
