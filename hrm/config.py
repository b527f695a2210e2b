"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # App
    APP_NAME: str = "Omyra HRM"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"

    # Remote REST backend
    API_BASE_URL: str = "http://localhost:5000/api"
    API_TIMEOUT_SECONDS: float = 30.0

    # Local persistence: "memory", "file" or "sql"
    STORAGE_BACKEND: str = "file"
    STORAGE_PATH: str = "hrm_storage.json"
    STORAGE_DATABASE_URL: str = "sqlite:///hrm_storage.db"

    # Dashboard shell
    MODULE_SWITCH_DELAY: float = 0.3
    SUCCESS_TOAST_SECONDS: float = 2.0
    CLOCK_TICK_SECONDS: float = 60.0
    WORK_DAY_START: str = "09:00"
    WORK_DAY_END: str = "18:00"
    SIDEBAR_BREAKPOINT: int = 1024

    # Aggregator
    GROWTH_WINDOW_DAYS: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


settings = get_settings()
