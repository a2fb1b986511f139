"""
Configuration Utility - Environment Variables Management

Centralized configuration loading from .env files using pydantic-settings.
Type-safe access to the crawler's process-level settings.

Usage:
    from utils.config import settings

    targets_path = settings.TARGET_APPS_PATH
    output_dir = settings.OUTPUT_DIR

The crawl core never reads settings directly; the process layer passes these
values in as explicit arguments.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Input / Output
    TARGET_APPS_PATH: str = Field(default="target_apps.json")
    OUTPUT_DIR: str = Field(default="output")

    # HTTP Client Configuration
    HTTP_TIMEOUT: float = Field(default=30.0, gt=0)
    HTTP_USER_AGENT: str = Field(default="app-review-crawler/0.1.0")
    REQUEST_DELAY_MS: int = Field(default=50, ge=0)

    # Scheduler Configuration
    CRAWL_SCHEDULE_CRON: str = Field(default="0 3 * * *")
    RUN_ONCE: bool = Field(default=True)

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")

    # Application Metadata
    ENVIRONMENT: str = Field(default="production")
    APP_NAME: str = Field(default="app-review-crawler")
    APP_VERSION: str = Field(default="0.1.0")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()
