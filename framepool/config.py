"""Configuration management using pydantic-settings."""

from datetime import date, datetime, time
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from framepool.constants import (
    DEFAULT_API_RATE_LIMIT_PER_SECOND,
    DEFAULT_CACHE_DURATION_SECONDS,
    DEFAULT_SEARCH_PAGE_SIZE,
    TIMEOUT_HTTP_DEFAULT,
)


class AccountSettings(BaseSettings):
    """Per-account settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FRAMEPOOL_",
        case_sensitive=False,
        extra="ignore",
    )

    # Immich server
    immich_server_url: str = Field(
        default="http://localhost:2283",
        description="Base URL of the Immich server"
    )
    api_key: str = Field(default="", description="Immich API key")

    # Asset filters
    show_archived: bool = Field(
        default=False,
        description="Include archived assets"
    )
    images_until_date: datetime | None = Field(
        default=None,
        description="Only show images taken on or before this date"
    )
    images_from_date: datetime | None = Field(
        default=None,
        description="Only show images taken on or after this date"
    )
    images_from_days: int | None = Field(
        default=None,
        ge=0,
        description="Only show images from the last N days (ignored if images_from_date is set)"
    )
    rating: int | None = Field(
        default=None,
        description="Only show images with exactly this rating"
    )
    recency_bias: float | None = Field(
        default=None,
        ge=0.0,
        description="Favor recent images when sampling (0 or unset = uniform)"
    )

    # Asset sources
    albums: list[str] = Field(default_factory=list, description="Album IDs to show")
    excluded_albums: list[str] = Field(
        default_factory=list,
        description="Album IDs whose assets are never shown"
    )
    people: list[str] = Field(default_factory=list, description="Person IDs to show")
    show_favorites: bool = Field(default=False, description="Show favorite assets")

    # Remote access
    http_timeout: float = Field(
        default=TIMEOUT_HTTP_DEFAULT,
        description="HTTP request timeout in seconds"
    )
    search_page_size: int = Field(
        default=DEFAULT_SEARCH_PAGE_SIZE,
        ge=1,
        le=1000,
        description="Number of assets requested per search call"
    )
    api_rate_limit_per_second: float = Field(
        default=DEFAULT_API_RATE_LIMIT_PER_SECOND,
        gt=0,
        description="Maximum Immich API requests per second"
    )

    # Cache
    cache_duration_seconds: float = Field(
        default=DEFAULT_CACHE_DURATION_SECONDS,
        ge=0,
        description="Seconds a filtered asset set stays cached (0 = until cleared)"
    )

    # Logging
    log_to_file: bool = Field(
        default=False,
        description="Enable logging to file with rotation"
    )
    log_dir: Path = Field(
        default=Path("output/logs"),
        description="Directory for log files"
    )
    log_max_age_days: int = Field(
        default=7,
        ge=1,
        le=30,
        description="Maximum age of log files to keep (days)"
    )

    @field_validator("images_until_date", "images_from_date", mode="before")
    @classmethod
    def _date_only(cls, value):
        # Plain dates mean midnight of that day
        if isinstance(value, str) and len(value) == 10:
            value = date.fromisoformat(value)
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        return value


# Global settings instance
settings = AccountSettings()
