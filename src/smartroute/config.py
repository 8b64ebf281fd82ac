"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SMARTROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "SmartRoute Delivery Planner API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Directory holding the persisted planner state.")
    storage_key: str = Field(
        default="smartroute_thai_data_v2",
        description="Storage key of the persisted stop list and route record.",
    )

    gemini_api_key: Optional[str] = Field(default=None, description="API key for the Gemini generative model.")
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    nominatim_user_agent: str = "smartroute-planner/1.0"
    geocode_delay_seconds: float = Field(
        default=0.8,
        ge=0.0,
        description="Pause between consecutive geocoding calls during an import.",
    )

    osrm_mirrors: tuple[str, ...] = Field(
        default=(
            "https://router.project-osrm.org",
            "https://routing.openstreetmap.de/routed-car",
        ),
        description="OSRM base URLs tried in priority order.",
    )
    osrm_profile: Literal["driving", "driving-hgv"] = "driving"
    osrm_geometries: Literal["geojson", "polyline"] = "geojson"
    osrm_max_retries: int = Field(default=1, ge=0)
    osrm_backoff_seconds: float = Field(default=1.0, ge=0.0)

    http_timeout_seconds: float = Field(default=60.0, gt=0.0)

    max_stops: int = Field(default=30, ge=1)
    fallback_latitude: float = 13.7563
    fallback_longitude: float = 100.5018
    fallback_jitter_degrees: float = Field(default=0.01, ge=0.0)
    diesel_price_thb: float = Field(default=33.0, gt=0.0)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "osrm_mirrors", mode="before")
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
