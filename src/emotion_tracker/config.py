"""Centralised application settings loaded from environment / .env file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """All runtime configuration for the emotion tracker.

    Values are read from environment variables first, then from a *.env* file
    located at the project root.  Every variable lives in the flat
    ``EMOTION_TRACKER_`` namespace (stripped automatically by
    *pydantic-settings*).
    """

    model_config = SettingsConfigDict(
        env_prefix="EMOTION_TRACKER_",
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Live tracking ─────────────────────────────────────────
    tick_interval_seconds: float = Field(2.0, gt=0)

    # ── Session history ───────────────────────────────────────
    history_capacity: int = Field(100, ge=1)
    bootstrap_samples: int = Field(50, ge=0)
    bootstrap_spacing_seconds: int = Field(30, ge=0)
    recent_window_size: int = Field(20, ge=1)  # Samples shown in trend charts

    # ── Simulated device ──────────────────────────────────────
    initial_battery_level: float = Field(85.0, ge=0, le=100)
    battery_drain_per_tick: float = Field(0.1, ge=0)
    random_seed: int | None = None  # None → OS entropy

    # ── Logging ───────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return a cached :class:`Settings` singleton."""
    return Settings()
