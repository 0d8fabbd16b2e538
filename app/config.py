from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Mailgun
    mailgun_api_key: str = Field(default="")
    mailgun_domain: str = Field(default="")
    mailgun_region: str = Field(default="us")  # "us" or "eu"
    mailgun_default_from: str = Field(default="")
    mailgun_timeout: float = Field(default=30.0)

    # Application
    debug: bool = Field(default=False)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
