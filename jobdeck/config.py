"""
JobDeck - Application configuration.

Centralized configuration using Pydantic Settings for environment variable management.

Environment Variables:
    All settings can be overridden via environment variables with JOBDECK_ prefix.

    AI Settings:
        JOBDECK_AI_ENABLED=true          - Toggle AI features
        GEMINI_API_KEY=...               - Gemini API key (JOBDECK_GEMINI_API_KEY also works)
        JOBDECK_GEMINI_MODEL=...         - Model to use (e.g., gemini-2.0-flash)

    Server Settings:
        JOBDECK_ALLOWED_ORIGINS=*        - Value of Access-Control-Allow-Origin
        JOBDECK_DATABASE_URL=...         - SQLAlchemy database URL
        JOBDECK_RATE_LIMIT_ENABLED=true  - Toggle request rate limiting
"""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import Optional


class AISettings(BaseSettings):
    """
    AI/Gemini API configuration settings.

    The API key is read from GEMINI_API_KEY, the name used by Google's own
    tooling, or from the prefixed JOBDECK_GEMINI_API_KEY.
    """
    ai_enabled: bool = True
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("JOBDECK_GEMINI_API_KEY", "GEMINI_API_KEY"),
    )
    gemini_model: str = "gemini-2.0-flash"

    class Config:
        env_prefix = "JOBDECK_"
        env_file = ".env"
        extra = "ignore"


class Settings(BaseSettings):
    """Combined application settings."""
    ai: AISettings = AISettings()

    # Value sent in Access-Control-Allow-Origin on every response
    allowed_origins: str = "*"

    # Database
    database_url: str = "sqlite:///./data/jobdeck.db"

    # Database connection pool (PostgreSQL only)
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800

    # Database retry settings
    db_retry_max_attempts: int = 3
    db_retry_base_delay: float = 0.1

    rate_limit_enabled: bool = True

    # Base URL used by jobdeck.client
    api_base_url: str = "http://localhost:8000/api"

    class Config:
        env_prefix = "JOBDECK_"
        env_file = ".env"
        extra = "ignore"


# Global settings instance
settings = Settings()
