"""
Configuration management using pydantic-settings

Loads configuration from environment variables and .env file
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database Configuration
    DATABASE_URL: str = Field(
        default="sqlite:///./palette_oms.db",
        description="SQLAlchemy database URL (SQLite or PostgreSQL)",
    )
    DB_ECHO: bool = Field(default=False, description="Log every SQL statement")

    # Authentication
    JWT_SECRET: str = Field(
        default="change-me",
        description="Shared secret used by the auth service to sign bearer tokens",
    )
    JWT_ALGORITHM: str = Field(default="HS256", description="Bearer token signature algorithm")
    JWT_AUDIENCE: Optional[str] = Field(
        default=None, description="Expected 'aud' claim; unchecked when unset"
    )

    # Delivery slots
    SLOT_CAPACITY: int = Field(default=5, ge=1, description="Orders per one-hour slot")
    DEFAULT_DAYS_AHEAD: int = Field(default=30, ge=1, description="Default slot generation window")
    SLOT_FAILURE_POLICY: Literal["proceed", "reject"] = Field(
        default="proceed",
        description="What order admission does when the slot cannot be reserved",
    )

    # Application Settings
    API_HOST: str = Field(default="0.0.0.0", description="API host to bind to")
    API_PORT: int = Field(default=8000, description="API port to listen on")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return Settings()
