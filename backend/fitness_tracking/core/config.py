"""
Application configuration.
All deployment-specific values loaded from environment variables.
"""
from typing import List, Literal, get_args
from pydantic_settings import BaseSettings

WeekKeyMode = Literal["year_week", "week"]
WEEK_KEY_MODES = get_args(WeekKeyMode)


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/fitness_tracking"
    DATABASE_ECHO: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Analytics
    # year_week keys weekly buckets by (ISO year, ISO week)
    # week keys by ISO week number only, so different years share a bucket
    ANALYTICS_WEEK_KEY: WeekKeyMode = "year_week"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
