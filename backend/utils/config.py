"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    host: str
    port: int
    business_opening_hour: int
    business_closing_hour: int
    slot_granularity_minutes: int
    availability_slot_minutes: int
    seed_sample_data: bool


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; tests override with dataclasses.replace."""
    load_dotenv(PROJECT_ROOT / ".env")
    return Settings(
        app_name=os.getenv("APP_NAME", "Meeting Room Booking API"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_env_int("PORT", 8000),
        business_opening_hour=_env_int("BUSINESS_OPENING_HOUR", 8),
        business_closing_hour=_env_int("BUSINESS_CLOSING_HOUR", 18),
        slot_granularity_minutes=_env_int("SLOT_GRANULARITY_MINUTES", 30),
        availability_slot_minutes=_env_int("AVAILABILITY_SLOT_MINUTES", 60),
        seed_sample_data=_env_bool("SEED_SAMPLE_DATA", True),
    )
