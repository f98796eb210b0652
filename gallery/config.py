"""
Application configuration using Pydantic Settings.
Process-level settings only; gallery behaviour settings (single library,
public photo visibility, ...) live in the ``configs`` table, see ConfigStore.
"""
import os
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, model_validator

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./gallery.db"


class Environment(str, Enum):
    """Application environment modes."""
    DEV = "DEV"
    PRODUCTION = "PRODUCTION"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(env_file=None, case_sensitive=False)
    
    # Environment
    environment: Environment = Field(
        default=Environment.DEV,
        description="Application environment: DEV or PRODUCTION"
    )
    
    # Application
    app_name: str = Field(default="Gallery Access API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    
    @model_validator(mode='after')
    def set_debug_from_environment(self):
        """Set debug mode based on environment unless DEBUG is set explicitly."""
        if 'DEBUG' not in os.environ:
            self.debug = self.environment == Environment.DEV
        return self
    
    @property
    def is_dev(self) -> bool:
        return self.environment == Environment.DEV
    
    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION
    
    # Database (empty value falls back to the local SQLite file)
    database_url: str = Field(default=DEFAULT_DATABASE_URL)
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)
    db_pool_timeout: int = Field(default=30)
    db_pool_recycle: int = Field(default=1800)
    slow_query_threshold_seconds: float = Field(default=1.0)

    @field_validator("database_url", mode="before")
    @classmethod
    def coerce_empty_database_url(cls, v: str) -> str:
        if not v or not str(v).strip():
            return DEFAULT_DATABASE_URL
        return v
    
    # JWT (tokens are issued elsewhere, this service only verifies them)
    jwt_secret_key: str = Field(default="jwt-secret-change-in-production")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=30)
    
    # Logging. NDJSON file logs are written only when a directory is set
    log_dir: Optional[str] = Field(
        default=None,
        description="Directory for NDJSON app.log / error.log. Empty disables file logging.",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Using lru_cache to avoid reading the environment on every request.
    """
    return Settings()
