"""
Application settings.

Values come from the environment (prefix ``PLANT_JOURNAL_``) or a ``.env``
file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the journal, analyzers and batch runs."""

    model_config = SettingsConfigDict(
        env_prefix="PLANT_JOURNAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "plant-journal"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Journal storage
    data_file: str = Field(default="plants.json", description="Journal JSON document")
    media_dir: str = Field(default="public", description="Root for stored images")
    initial_days: int = Field(default=45, ge=1, description="Days pre-populated on create")

    # Analyzer
    gemini_api_key: str = ""
    gemini_text_model: str = "gemini-2.0-flash-lite-001"
    gemini_vision_model: str = "gemini-2.5-pro"
    gemini_image_model: str = "gemini-3-pro-image-preview"
    plantid_api_key: str = ""

    # Batch driver
    control_url: str = Field(default="http://localhost:3000", description="Remote control API")
    operation_delay: float = Field(default=2.0, ge=0)
    day_delay: float = Field(default=3.0, ge=0)
    rate_per_second: float | None = Field(default=None, gt=0, description="Token bucket rate")
    rate_burst: int = Field(default=1, ge=1)

    # Historical weather backfill
    lat: float = 37.7749
    lon: float = -122.4194
    timezone: str = "America/Los_Angeles"
    day_offset: int = Field(default=0, description="Added to the day mapped from the start date")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
