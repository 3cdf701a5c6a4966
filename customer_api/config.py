# customer_api/config.py
"""
Environment-driven settings.

Values come from environment variables (or a local .env file); the
defaults give a working SQLite setup for local development.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    database_url: str = "sqlite:///db.sqlite"  # file in project root
    sql_echo: bool = False

    log_level: str = "INFO"

    # Which validator the HTTP layer runs payloads through.
    validation_strategy: Literal["declarative", "rules"] = "declarative"


@lru_cache
def get_settings() -> Settings:
    return Settings()
