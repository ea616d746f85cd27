"""
Application Configuration

This module provides type-safe configuration loading using Pydantic settings.
Environment variables are loaded from .env file and validated.

Usage:
    from flashdeck.config import settings

    # Access settings
    redis_url = settings.REDIS_URL
    caps = (settings.SESSION_CAP_STRUGGLING, settings.SESSION_CAP_CONFIDENT)
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Flashdeck"
    DEBUG: bool = False

    # Redis (durable mirror of decks, cards and study history)
    REDIS_URL: str = "redis://localhost:6379/0"

    # Calendar-day decisions (due set, overdue test, streaks) all use this zone.
    # IANA name, e.g. "America/Chicago". Should match the learner's device.
    STUDY_TIMEZONE: str = "UTC"

    # Session sizing
    # Recent accuracy assumed when there is no study history yet
    SESSION_DEFAULT_ACCURACY: int = 80
    # Below this accuracy the learner is "struggling"
    SESSION_STRUGGLING_ACCURACY: int = 60
    # At or above this accuracy the learner is "confident"
    SESSION_CONFIDENT_ACCURACY: int = 80
    SESSION_CAP_STRUGGLING: int = 5
    SESSION_CAP_STEADY: int = 10
    SESSION_CAP_CONFIDENT: int = 15
    # Number of most recent sessions averaged into recent accuracy
    SESSION_RECENT_WINDOW: int = 10

    # XP rewards reported back to the host
    XP_PER_CARD: int = 2
    XP_BONUS: int = 25
    XP_BONUS_ACCURACY: int = 80

    # Streaks
    STREAK_MILESTONES: list[int] = [3, 7, 14, 30, 100]

    # Struggling card heuristic
    STRUGGLING_EASE_THRESHOLD: float = 2.0
    STRUGGLING_MIN_REVIEWS: int = 5
    STRUGGLING_ACCURACY_RATIO: float = 0.5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()


@lru_cache()
def load_yaml_config() -> dict[str, Any]:
    """Load application configuration from config/default.yaml."""
    config_path = Path(__file__).parent.parent.parent.parent / "config" / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


yaml_config: dict[str, Any] = load_yaml_config()
