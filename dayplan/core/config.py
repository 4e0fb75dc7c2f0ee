"""
Application configuration using Pydantic Settings.

Scheduling granularity and the bounded day range are configuration, not constants.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./dayplan.db"

    # ===========================================
    # Time grid
    # ===========================================
    # IANA timezone used to anchor slots to absolute timestamps
    TIMEZONE: str = "UTC"
    DAY_START_HOUR: int = Field(6, ge=0, le=23)
    DAY_END_HOUR: int = Field(22, ge=1, le=24)
    # Schedule builders use the fine grid, the day timeline the coarse one
    SCHEDULE_SLOT_MINUTES: int = 15
    TIMELINE_SLOT_MINUTES: int = 30

    # ===========================================
    # Scheduling defaults
    # ===========================================
    DEFAULT_DURATION_MINUTES: int = Field(60, ge=1)
    FREE_SLOT_SUGGESTIONS: int = Field(5, ge=1)

    # ===========================================
    # Statistics
    # ===========================================
    ROLLING_WEEKS: int = Field(4, ge=1)

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8081"]
    )

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
