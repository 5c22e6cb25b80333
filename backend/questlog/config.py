"""
Configuration settings using Pydantic Settings.
"""

import warnings
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parents[1]

_DEV_SECRET_KEY = "dev-secret-key-not-for-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    SECRET_KEY: str = ""
    SESSION_COOKIE_NAME: str = "questlog_session"
    SESSION_MAX_AGE_SECONDS: int = 14 * 24 * 60 * 60
    SESSION_HTTPS_ONLY: bool = False

    STORAGE_BACKEND: Literal["memory", "sqlite"] = "memory"
    DATABASE_PATH: str = "database/questlog.db"

    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    @model_validator(mode="after")
    def resolve_defaults(self):
        if not self.SECRET_KEY:
            if not self.DEBUG:
                warnings.warn("SECRET_KEY not set, using insecure default. Set SECRET_KEY in production!")
            self.SECRET_KEY = _DEV_SECRET_KEY

        db_path = Path(self.DATABASE_PATH)
        if not db_path.is_absolute():
            self.DATABASE_PATH = str((BASE_DIR / db_path).resolve())

        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    :return: Cached Settings instance
    :rtype: Settings
    """
    return Settings()
