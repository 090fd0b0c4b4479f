"""Application configuration."""

import os
from typing import Literal

from pydantic import PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lunch_picker.domain.sessions import PickPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    store_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_sessions_table: str = "lunch_sessions"
    store_max_attempts: PositiveInt = 5
    users_csv_path: str | None = None
    pick_policy: str = PickPolicy.ANY.value
    random_seed: int | None = None
    log_level: LogLevel = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


def parse_pick_policy(raw: str | None) -> PickPolicy:
    """Parse a pick policy name from env, defaulting to ``any``."""
    if raw is None:
        return PickPolicy.ANY
    cleaned = raw.strip().lower().replace("-", "_")
    if not cleaned:
        return PickPolicy.ANY
    try:
        return PickPolicy(cleaned)
    except ValueError:
        raise ValueError(f"Unknown pick policy: {raw!r}") from None
