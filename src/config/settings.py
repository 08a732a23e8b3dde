"""Configuration management for the site analytics proxy."""

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.services.analytics_service import MAX_WINDOW_DAYS

CLOUDFLARE_GRAPHQL_URL = "https://api.cloudflare.com/client/v4/graphql"


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Pages/Workers secrets pasted through a dashboard may carry a BOM
    that breaks the Authorization header.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Cloudflare credentials
    cf_api_token: str = Field(
        default="", validation_alias=AliasChoices("CF_API_TOKEN", "API_TOKEN")
    )
    cf_zone_id: str = Field(default="", validation_alias=AliasChoices("CF_ZONE_ID", "ZONE_ID"))
    cf_graphql_url: str = CLOUDFLARE_GRAPHQL_URL

    @field_validator("cf_api_token", "cf_zone_id", mode="after")
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Aggregation settings
    analytics_window_days: int = Field(default=30, ge=1, le=MAX_WINDOW_DAYS)
    analytics_top_countries: int = Field(default=10, ge=1, le=50)
    request_timeout: float = Field(default=15.0, gt=0)

    # HTTP
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None
    debug: bool = False

    @property
    def has_credentials(self) -> bool:
        """True when both the API token and the zone id are configured."""
        return bool(self.cf_api_token and self.cf_zone_id)

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def masked_zone_id(self) -> str:
        """Zone id safe for echoing back to clients."""
        if not self.cf_zone_id:
            return "not set"
        return f"{self.cf_zone_id[:8]}..."


# Global settings instance
settings = Settings()
