# =====================================================
# FILE: app/core/config.py
# Application Settings
# =====================================================

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Faculty Contracts"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    # Database
    DATABASE_URL: str = "sqlite:///./contracts.db"
    DB_ECHO: bool = False
    DB_POOL_PRE_PING: bool = True

    # Demo fixtures loaded on startup when the store is empty
    SEED_DEMO_DATA: bool = True

    # Reporting
    EXPIRY_WARNING_DAYS: int = Field(default=30, ge=1, le=365)
    # 0 disables the background reminder job
    EXPIRY_REMINDER_INTERVAL_MINUTES: int = Field(default=0, ge=0)

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
