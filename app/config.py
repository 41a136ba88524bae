# path: skate-spot-api/app/config.py
"""
Configuration for the skate spot API.
Loads environment variables (prefix SKATE_) and provides typed settings.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models.spot_models import DEFAULT_ACCENT_COLOR, Coordinate


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = "skate-spot-api"
    log_level: str = "info"

    # Ingestion
    fallback_accent_color: str = DEFAULT_ACCENT_COLOR

    # Markers
    user_marker_label: str = "You are here"
    user_marker_tint: str = "blue"

    # Camera target when there is nothing to focus on
    fallback_latitude: float = 49.27235336018808
    fallback_longitude: float = -123.13455838338278

    # Marker matching tolerance, degrees per axis
    coordinate_epsilon_deg: float = 1e-6

    # Applied to new sessions that don't send their own query; 0 disables
    default_radius_miles: Optional[float] = 25.0

    # Session store
    max_sessions: int = 1000
    session_ttl_seconds: Optional[float] = 3600

    @property
    def fallback_coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.fallback_latitude, longitude=self.fallback_longitude)

    model_config = SettingsConfigDict(
        env_prefix="SKATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
