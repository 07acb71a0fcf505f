"""Engine settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration — all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AGROEXPERT_",
        case_sensitive=False,
    )

    # ── Crop defaults ───────────────────────────────────────────────────────
    default_crop: str = "Generic"

    # ── Collaborator layer ──────────────────────────────────────────────────
    # Substituted by the advisor when no air temperature telemetry exists.
    fallback_air_temp: float = 15.0
    unavailable_message: str = (
        "Advisory analysis is temporarily unavailable. Please try again later."
    )

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
