"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env file.
"""
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    app_name: str = "RidePilot Driver Portal"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # =========================================================================
    # Hosted data store
    # =========================================================================
    # Both values are required: the portal cannot start without them.
    database_url: str = Field(
        ...,
        min_length=1,
        description="Async SQLAlchemy URL of the hosted store (postgresql+asyncpg://...)",
    )

    database_service_key: SecretStr = Field(
        ...,
        description="Elevated service-role credential, bypasses row-level policies",
    )

    db_pool_size: int = 5
    db_max_overflow: int = 10

    @field_validator("database_service_key")
    @classmethod
    def service_key_must_be_set(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("database_service_key must not be blank")
        return v

    @property
    def store_url(self) -> URL:
        """Async connection URL authorized with the service key."""
        return make_url(self.database_url).set(
            password=self.database_service_key.get_secret_value()
        )

    @property
    def store_url_sync(self) -> URL:
        """Same connection with the sync driver (used by Alembic)."""
        return self.store_url.set(drivername="postgresql")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
