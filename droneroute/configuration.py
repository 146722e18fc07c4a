"""Mini README: Centralised configuration models and helpers for droneroute.

Structure:
    * DronerouteSettings - pydantic-settings model describing a delivery run.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``DRONEROUTE_*`` environment variables
    (or a local ``.env`` file). The operating area, base position and move
    budget are fixed for the lifetime of one run, so the settings object is
    cached and validated once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .geometry.coordinates import (
    APPLETON_TOWER,
    DEFAULT_OPERATING_AREA,
    Coordinate,
    OperatingArea,
)


class DronerouteSettings(BaseSettings):
    """Runtime configuration for a droneroute delivery run."""

    model_config = SettingsConfigDict(
        env_prefix="DRONEROUTE_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    data_directory: Path = Field(
        Path("data"),
        description="Directory where flight logs and delivery records are written.",
    )
    server_url: str = Field(
        "http://localhost:9898",
        description="Base URL of the web server publishing menus, words and no-fly zones.",
    )
    request_timeout: float = Field(10.0, gt=0, description="HTTP timeout in seconds.")
    interface_host: str = Field("0.0.0.0", description="Interface the API binds to.")
    interface_port: int = Field(8000, ge=1, le=65535, description="Port the API listens on.")
    min_longitude: float = Field(DEFAULT_OPERATING_AREA.min_longitude)
    max_longitude: float = Field(DEFAULT_OPERATING_AREA.max_longitude)
    min_latitude: float = Field(DEFAULT_OPERATING_AREA.min_latitude)
    max_latitude: float = Field(DEFAULT_OPERATING_AREA.max_latitude)
    base_longitude: float = Field(APPLETON_TOWER.longitude)
    base_latitude: float = Field(APPLETON_TOWER.latitude)
    move_budget: int = Field(1500, ge=0, description="Moves available for the whole run.")
    max_passes: int = Field(
        1,
        ge=1,
        description="Scheduling passes; undelivered orders are retried in later passes.",
    )
    orders_file: Optional[Path] = Field(
        None,
        description="JSON order file; defaults to <data_directory>/orders.json.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @model_validator(mode="after")
    def _check_area(self) -> "DronerouteSettings":
        if self.min_longitude >= self.max_longitude or self.min_latitude >= self.max_latitude:
            raise ValueError("Operating area bounds must describe a non-empty rectangle")
        if not self.operating_area.contains(self.base):
            raise ValueError("Base position must lie strictly inside the operating area")
        return self

    @property
    def operating_area(self) -> OperatingArea:
        return OperatingArea(
            min_longitude=self.min_longitude,
            max_longitude=self.max_longitude,
            min_latitude=self.min_latitude,
            max_latitude=self.max_latitude,
        )

    @property
    def base(self) -> Coordinate:
        return Coordinate(self.base_longitude, self.base_latitude)

    @property
    def resolved_orders_file(self) -> Path:
        return self.orders_file or self.data_directory / "orders.json"


@lru_cache()
def get_settings() -> DronerouteSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return DronerouteSettings()
