"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_FREE_WEIGHT_KG = 1.0
DEFAULT_FREE_DISTANCE_KM = 5.0
DEFAULT_FAST_PATH_CITIES: tuple[str, ...] = ("Douala", "Yaoundé", "Bafoussam", "Bamenda", "Garoua")
DEFAULT_FAST_PATH_DAYS = 1
DEFAULT_LEAD_DAYS = 3
DEFAULT_REGION_LEAD_DAYS: dict[str, int] = {
    "Centre": 2,
    "Littoral": 2,
    "Ouest": 3,
    "Nord-Ouest": 3,
    "Sud-Ouest": 3,
    "Nord": 4,
    "Adamaoua": 4,
    "Est": 5,
    "Sud": 5,
    "Extrême-Nord": 5,
}


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="DLV_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Delivery Fee API"
    api_prefix: str = "/api"
    tariff_file: Path = Field(
        default=Path("data/delivery_tariffs.xlsx"),
        description="Zone and pricing workbook used when Supabase is not configured.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Pricing policy
    free_weight_kg: float = Field(default=DEFAULT_FREE_WEIGHT_KG, ge=0.0, description="Weight carried at no surcharge.")
    free_distance_km: float = Field(default=DEFAULT_FREE_DISTANCE_KM, ge=0.0, description="Distance carried at no surcharge.")

    # Lead-time policy
    fast_path_cities: tuple[str, ...] = Field(
        default=DEFAULT_FAST_PATH_CITIES,
        description="Cities served next day regardless of region.",
    )
    fast_path_days: int = Field(default=DEFAULT_FAST_PATH_DAYS, ge=0)
    region_lead_days: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_REGION_LEAD_DAYS))
    default_lead_days: int = Field(default=DEFAULT_LEAD_DAYS, ge=0)

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("tariff_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "fast_path_cities", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
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

    @field_validator("region_lead_days", mode="before")
    @classmethod
    def _parse_region_days(cls, value: Any) -> dict[str, int]:
        """Parse region lead days from a JSON object or ``Region:days`` pairs."""
        if isinstance(value, dict):
            return {str(key): int(days) for key, days in value.items()}
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, dict):
                    return {str(key): int(days) for key, days in parsed.items()}
            except (json.JSONDecodeError, TypeError):
                pass
            table: dict[str, int] = {}
            for pair in value.split(","):
                if not pair.strip():
                    continue
                region, sep, days = pair.rpartition(":")
                if not sep or not region.strip():
                    raise ValueError(f"Invalid region lead time entry '{pair.strip()}'")
                table[region.strip()] = int(days)
            return table
        return {}


settings = Settings()
