"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone used to timestamp persisted records",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    notification_dispatch_concurrency: int = Field(
        default=8,
        description="Maximum number of notification rows written concurrently per dispatch",
        gt=0,
    )
    notification_page_size: int = Field(
        default=20,
        description="Default number of notifications returned per page",
        gt=0,
    )
    notification_max_page_size: int = Field(
        default=100,
        description="Upper bound for the page size accepted when listing notifications",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_page_sizes(self) -> "Settings":
        if self.notification_page_size > self.notification_max_page_size:
            raise ValueError(
                "NOTIFICATION_PAGE_SIZE cannot exceed NOTIFICATION_MAX_PAGE_SIZE"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
