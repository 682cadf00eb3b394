"""Application configuration and settings management."""

from typing import Any, Optional

import json
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TRIPWEATHER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Trip Weather API"
    api_prefix: str = "/api"

    openrouteservice_api_key: Optional[str] = Field(
        default=None,
        description="API key for OpenRouteService directions.",
    )
    openrouteservice_base_url: str = Field(
        default="https://api.openrouteservice.org",
        description="Base URL for the OpenRouteService API.",
    )
    openrouteservice_profile: str = Field(
        default="driving-car",
        description="OpenRouteService profile used for directions.",
    )
    geoapify_api_key: Optional[str] = Field(
        default=None,
        description="API key for Geoapify reverse geocoding and search.",
    )
    geoapify_base_url: str = Field(default="https://api.geoapify.com")
    weather_base_url: str = Field(default="https://api.weather.gov")
    weather_user_agent: str = Field(
        default="TripWeather/1.0 (tripweather.app)",
        description="User-Agent header required by the National Weather Service API.",
    )
    nrel_api_key: Optional[str] = Field(
        default=None,
        description="API key for the NREL alternative fuel stations API.",
    )
    nrel_base_url: str = Field(default="https://developer.nrel.gov")

    http_timeout_seconds: float = Field(default=30.0, gt=0.0)
    http_max_retries: int = Field(default=2, ge=0)
    http_backoff_seconds: float = Field(default=0.5, ge=0.0)

    default_timezone_name: str = Field(
        default="America/Los_Angeles",
        description="Zone used for the current time when a requested zone is unknown.",
    )
    timezone_cache_size: int = Field(default=4096, ge=1)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("default_timezone_name")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone '{value}'") from exc
        return value

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
