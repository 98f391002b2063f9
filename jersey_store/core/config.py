"""Application configuration settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Process environment wins over the optional .env file
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "Jersey Store"
    VERSION: str = "0.1.0"
    DESCRIPTION: str = "Catalog of soccer jerseys with an admin form"
    STORE_TITLE: str = "African Soccer Jersey Store"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    # Database
    DATABASE_URL: str = "sqlite:///./jersey_store.db"

    # Upper bound for a single persistence round-trip
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    @field_validator("REQUEST_TIMEOUT_SECONDS")
    @classmethod
    def timeout_must_be_positive(cls, value: float) -> float:
        """Reject zero or negative timeouts."""
        if value <= 0:
            raise ValueError("REQUEST_TIMEOUT_SECONDS must be greater than 0")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
