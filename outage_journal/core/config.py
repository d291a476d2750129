"""Application configuration settings."""

import os
import secrets
from typing import List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Basic settings
    PROJECT_NAME: str = "Outage Journal"
    DEBUG: bool = False
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = secrets.token_urlsafe(32)

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    RELOAD: bool = False

    # Security
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720  # 12 hours
    ALLOWED_HOSTS: List[str] = ["*"]

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",
    ]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS origins."""
        if isinstance(v, str):
            if not v.startswith("["):
                return [i.strip() for i in v.split(",")]
            else:
                # Handle JSON array string format
                import json

                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    raise ValueError(f"Invalid JSON format for CORS origins: {v}")
        elif isinstance(v, list):
            return v
        raise ValueError(f"CORS origins must be string or list, got {type(v)}")

    # Database (single SQLite file)
    DATABASE_URL: str = "sqlite+aiosqlite:///./outages.db"
    DB_ECHO: bool = False

    # Testing
    TESTING: bool = os.getenv("TESTING", "false").lower() == "true"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Journal / reports
    TIMEZONE: str = "UTC"
    TIMELINE_START: str = "2025-01-01"
    HAZARDOUS_LIMIT: int = 50
    TOP_LIMIT: int = 5
    DEADLINE_WARNING_HOURS: int = 2

    @property
    def database_url_async(self) -> str:
        """Get asynchronous database URL for SQLAlchemy."""
        # In-memory database for testing
        if self.TESTING:
            return "sqlite+aiosqlite:///:memory:"

        url = str(self.DATABASE_URL)
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

    @property
    def database_url_sync(self) -> str:
        """Get synchronous database URL for scripts."""
        return self.database_url_async.replace("sqlite+aiosqlite://", "sqlite://", 1)


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
