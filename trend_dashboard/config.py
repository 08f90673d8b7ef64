# trend_dashboard/config.py
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings (also read from a local .env file)."""

    APP_NAME: str = "trend-dashboard"

    # Database
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/trend_dashboard"
    SQL_ECHO: bool = False
    STORE_BACKEND: Literal["sql", "memory"] = "sql"
    STORE_TIMEOUT_SECONDS: Optional[float] = None
    CREATE_TABLES: bool = True  # development only, there are no migrations

    # HTTP
    DASHBOARD_PREFIX: str = ""
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
