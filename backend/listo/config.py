"""
Configuration settings for the Listo shopping-list API.

Loads environment variables from .env file and provides typed configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    PROJECT_NAME: str = "Listo API"
    API_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Security Configuration
    SECRET_KEY: str = Field(
        default="3f1c0b8e5d2a4f7e9c6b1a0d8e7f6c5b4a3d2e1f0c9b8a7d6e5f4c3b2a1d0e9f",
        description="Secret key for JWT",
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60 * 24, description="Access token expiration time in minutes"
    )
    BCRYPT_ROUNDS: int = Field(
        default=12, ge=4, le=31, description="bcrypt cost factor for password hashes"
    )
    AUTH_RATE_LIMIT: str = Field(
        default="5/minute", description="Rate limit for login endpoints"
    )
    RATE_LIMIT_ENABLED: bool = Field(
        default=True, description="Enable rate limiting on login endpoints"
    )

    # Storage Configuration
    STORAGE_BACKEND: str = Field(
        default="sqlite", description="Storage backend: 'sqlite' or 'memory'"
    )
    DATABASE_URL: str = Field(
        default="sqlite:///./data/listo.db", description="SQLite database URL"
    )
    DATABASE_ECHO: bool = Field(
        default=False, description="Echo SQL queries (for debugging)"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    ENABLE_FILE_LOGGING: bool = Field(
        default=False, description="Enable logging to file"
    )
    LOG_DIR: str = Field(default="./logs", description="Directory for log files")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
