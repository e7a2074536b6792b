"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EPORTFOLIO_",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    project_name: str = "Digital Skills E-Portfolio"
    version: str = "1.0.0"

    # Requests
    request_expiry_days: int = 30

    # Progress
    theory_keyword: str = "theory"  # matched case-insensitively in supervisor notes
    unknown_supervisor_name: str = "Unknown"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
