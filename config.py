"""
Configuration settings for the learnhub developer CLI.

Uses Pydantic Settings for environment variable management with .env file support.
The scheduling engines never read these; thresholds live in AdaptiveConfig
and SM2Config.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum loguru level written to stderr by the CLI",
    )

    # ========================================
    # Review Queue
    # ========================================
    review_batch_size: int = Field(
        default=20,
        ge=1,
        description="Default number of words selected for a review batch",
    )
    expected_response_ms: int = Field(
        default=10000,
        ge=1,
        description="Expected answer time used when deriving SM-2 quality from timing",
    )

    # ========================================
    # Difficulty Adaptation
    # ========================================
    default_start_level: int = Field(
        default=1,
        ge=1,
        le=5,
        description="Starting difficulty when replaying an answer log",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
