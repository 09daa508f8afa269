"""Configuration management using pydantic-settings."""
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Gemini API key (required)
    google_api_key: str

    # Image model used when a request does not name one
    default_model: str = "gemini-2.5-flash-image"

    # Application settings
    app_name: str = "greeting-card-generator"

    # Server settings
    backend_host: str = "0.0.0.0"
    backend_port: int = Field(
        default=3000,
        validation_alias=AliasChoices("backend_port", "port"),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
