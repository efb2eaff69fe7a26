from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # env: local|dev|stage|prod
    APP_ENV: str = "dev"

    # DB
    DATABASE_URL: str = "sqlite+aiosqlite:///./habittracker.db"
    DATABASE_ECHO: bool = False
    ALEMBIC_INI_PATH: str = "alembic.ini"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Statistics
    STATS_WINDOW_DAYS: int = 30

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        allowed = {"local", "dev", "stage", "prod"}
        value = value.lower()
        if value not in allowed:
            raise ValueError(f"APP_ENV must be one of {sorted(allowed)}, got '{value}'")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"LOG_LEVEL '{value}' is not a valid logging level")
        return value

    @field_validator("STATS_WINDOW_DAYS")
    @classmethod
    def validate_stats_window(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("STATS_WINDOW_DAYS must be greater than zero")
        return value


settings = Settings()
