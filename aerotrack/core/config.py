"""Application configuration and settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic import PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        env_ignore_empty=True,
        validate_default=True,
    )

    # Project metadata
    PROJECT_NAME: str = "AeroTrack"
    PROJECT_VERSION: str = "0.1.0"
    PROJECT_DESCRIPTION: str = "Aircraft manufacturing assembly tracking API."

    # Application settings
    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: PositiveInt = 8000

    # Request timing
    TIMING_HEADERS_ENABLED: bool = True
    TIMING_LOG_ENABLED: bool = True
    TIMING_LOG_COLORS: bool = True

    # CORS settings
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    CORS_ALLOW_METHODS: list[str] = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    CORS_ALLOW_HEADERS: list[str] = ["Content-Type"]
    CORS_ALLOW_CREDENTIALS: bool = False

    @field_validator("ENVIRONMENT", mode="before")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
