"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    openai_vision_model: str = "gpt-4.1"
    openai_store: bool = False
    data_dir: Path = Path("./data")
    state_namespace: str = "sehatSenseData"
    timezone: str | None = None
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    image_search_url_template: str = "https://source.unsplash.com/500x300/?{query}"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        """Return whether Supabase should hold the state document."""
        return bool(self.supabase_url and self.supabase_service_key)
