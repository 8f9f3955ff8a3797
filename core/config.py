# core/config.py

"""
Dashboard settings, read from the environment (prefix `CLASSROOM_`) or an optional `.env` file.

Engine functions take explicit parameters; their defaults match the defaults here, so hosts
that need different values pass `get_settings().<field>` through.
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from models.student import GradeLevel


class Settings(BaseSettings):
    trend_window_days: int = 7
    top_performers_limit: int = 5
    grade_levels: list[str] = [level.value for level in GradeLevel]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CLASSROOM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("trend_window_days")
    @classmethod
    def require_positive_window(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Trend window must be at least one day.")
        return value

    @field_validator("top_performers_limit")
    @classmethod
    def require_non_negative_limit(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Top performers limit cannot be negative.")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}.")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
