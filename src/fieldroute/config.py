"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FIELDROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Field Route Service"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")
    data_root: Path = Field(default=Path("data"), description="Root directory for archived route runs.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
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

    max_stops_per_route: int = Field(
        default=250,
        ge=1,
        description="Upper bound on stops accepted by the nearest-neighbour sequencer (quadratic cost).",
    )
    work_order_fetch_limit: int = Field(default=50, ge=1)
    active_work_order_statuses: tuple[str, ...] = Field(
        default=("pending", "scheduled", "en_route", "in_progress", "paused"),
        description="Work order statuses that still need a technician visit.",
    )
    dispatch_load_penalty_km: float = Field(
        default=5.0,
        ge=0.0,
        description="Distance-equivalent penalty added per active job when ranking technicians.",
    )
    unknown_distance_km: float = Field(
        default=9999.0,
        ge=0.0,
        description="Distance assumed when either side of a dispatch comparison has no coordinates.",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "active_work_order_statuses", mode="before")
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
