"""
Application configuration.

Settings are read from environment variables and an optional ``.env`` file;
names are case-sensitive (``MAX_ANSWER_LENGTH=500``).
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Application
    APP_NAME: str = "Polycheck Grading API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production

    # API
    API_PREFIX: str = "/api/v1"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: list[str] = ["*"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_FILE: Optional[str] = None

    # Grading
    MAX_ANSWER_LENGTH: int = Field(default=1000, gt=0)
    REQUIRE_SIMPLIFIED: bool = True  # expanded answers must have like terms combined
    FACTORED_EXPANSION_HINT: bool = True  # say so when a wrong factoring still expands correctly
    MAX_EXPANSION_DEGREE: int = Field(default=200, ge=0)  # larger factored answers skip that hint


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
