"""
Environment configuration using pydantic-settings.

Environment variables (prefix: LANGUAGE_MONOPOLY_):
    LANGUAGE_MONOPOLY_STARTING_RESOURCES - Resources each player starts with (default: 1500)
    LANGUAGE_MONOPOLY_START_SALARY       - Paid when passing Start (default: 200)
    LANGUAGE_MONOPOLY_BUILD_COST         - Cost of one house (default: 50)
    LANGUAGE_MONOPOLY_ACADEMY_COST       - Cost of the academy upgrade (default: 100)
    LANGUAGE_MONOPOLY_SEED               - Seed for dice and deck shuffles (default: unset)
    LANGUAGE_MONOPOLY_LOG_LEVEL          - Logging level for scripts (default: INFO)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class GameSettings(BaseSettings):
    """Tunable rule constants and runtime options."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="LANGUAGE_MONOPOLY_",
    )

    starting_resources: int = Field(default=1500, ge=0)
    start_salary: int = Field(default=200, ge=0)
    build_cost: int = Field(default=50, ge=0)
    academy_cost: int = Field(default=100, ge=0)
    starting_upgrade_credits: int = Field(default=0, ge=0)

    library_reward: int = Field(default=50, ge=0)
    canteen_reward: int = Field(default=100, ge=0)
    oratory_reward: int = Field(default=50, ge=0)
    oratory_penalty: int = Field(default=30, ge=0)

    seed: Optional[int] = Field(default=None, description="Seed for dice and deck shuffles.")
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept any standard logging level name, case-insensitively."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_game_settings() -> GameSettings:
    """Return cached settings instance."""
    return GameSettings()


def configure_logging(settings: Optional[GameSettings] = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_game_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
