"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from session_scheduler.domain.actors import Role

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    gateway_token: str
    sessions_table: str = "sessions"
    users_table: str = "users"
    append_participant_function: str = "append_session_participant"
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_role(raw: str | None) -> Role | None:
    """Parse a role forwarded by the gateway."""
    if raw is None:
        return None
    cleaned = raw.strip().lower()
    if not cleaned:
        return None
    try:
        return Role(cleaned)
    except ValueError:
        return None
