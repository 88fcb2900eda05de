"""Application configuration utilities."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="Hospital Management System API",
    )
    app_version: str = Field(
        default="1.0.0",
    )

    supabase_url: str = Field(
        default="http://localhost:54321",
    )
    supabase_anon_key: str = Field(
        default="change-me",
    )
    supabase_service_role_key: str = Field(
        default="change-me",
    )
    supabase_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
    )

    resend_api_key: Optional[str] = Field(
        default=None,
    )
    email_from: str = Field(
        default="onboarding@resend.dev",
    )
    email_redirect_to: Optional[str] = Field(
        default="delivered@resend.dev",
    )

    cors_allow_origins: List[str] = Field(
        default_factory=lambda: ["*"],
    )
    host: str = Field(
        default="0.0.0.0",
    )
    port: int = Field(
        default=5000,
    )
    log_level: str = Field(
        default="INFO",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
