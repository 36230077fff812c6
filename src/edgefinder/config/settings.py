"""Application configuration schema and validation."""

from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    env: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    reference_book: str = Field(
        default="pinnacle",
        description="Bookmaker treated as the sharp baseline (case-insensitive name match)",
    )
    server_host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP API binds to",
    )
    server_port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port the HTTP API listens on",
    )
    http_timeout_seconds: int = Field(
        default=10,
        ge=1,
        le=60,
        description="Total timeout for a single upstream request",
    )
    http_retries: int = Field(
        default=2,
        ge=0,
        le=5,
        description="Retries after a failed upstream request (linear backoff: 1s, 2s, ...)",
    )
    cache_ttl_seconds: int = Field(
        default=300,
        ge=0,
        le=3600,
        description="TTL for cached upstream payloads (0 disables caching)",
    )
    season: int = Field(
        default=2025,
        ge=1900,
        description="Season used for standings, pace and player stats",
    )
    odds_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="API key for The Odds API",
    )
    odds_api_base_url: str = Field(
        default="https://api.the-odds-api.com/v4",
        description="Base URL for The Odds API",
    )
    apisports_key: SecretStr = Field(
        default=SecretStr(""),
        description="API key for API-Sports (x-apisports-key header)",
    )
    apisports_host: str = Field(
        default="v1.baseball.api-sports.io",
        description="API-Sports host",
    )
    sportradar_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="API key for Sportradar (Api-Key header)",
    )
    sportradar_host: str = Field(
        default="api.sportradar.com",
        description="Sportradar host",
    )
    sportradar_mlb_version: str = Field(
        default="v7",
        description="Sportradar MLB API version",
    )
    sportradar_odds_version: str = Field(
        default="v2",
        description="Sportradar odds comparison API version",
    )
    mlb_stats_api_base_url: str = Field(
        default="https://statsapi.mlb.com/api/v1",
        description="Base URL for the MLB Stats API",
    )
    ev_threshold_percent: float = Field(
        default=2.0,
        ge=0.0,
        le=20.0,
        description="Minimum no-vig EV (%) for a side to be reported as an opportunity",
    )
    min_arb_percent: float = Field(
        default=1.5,
        ge=0.0,
        le=20.0,
        description="Minimum guaranteed profit (%) for an arbitrage to be reported",
    )

    @field_validator("reference_book")
    @classmethod
    def validate_reference_book(cls, v: str) -> str:
        """Reject a blank reference book name."""
        if not v.strip():
            raise ValueError("reference_book must not be blank")
        return v.strip()


_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create the singleton AppConfig instance."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reset_config() -> None:
    """Drop the cached AppConfig so the next get_config() reloads the environment."""
    global _config
    _config = None
