"""
GRO Locator configuration via pydantic-settings.

Environment variables (prefix ``GRO_``) override defaults.  The SK-42 zone
and its datum shift are the bridge between the planar grid the points are
surveyed in and the WGS-84 coordinates map services expect.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import ClassVar

from pydantic_settings import BaseSettings, SettingsConfigDict

from gro.errors import ConfigurationError


class Settings(BaseSettings):
    env_path: ClassVar[str] = str(Path(__file__).resolve().parents[1] / ".env")
    model_config = SettingsConfigDict(
        env_file=env_path,
        env_file_encoding="utf-8",
        env_prefix="GRO_",
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────
    app_name: str = "GRO Locator"
    debug: bool = False

    # ── Geodesy ────────────────────────────────────────────────────
    # SK-42 Gauss-Krüger zone of the object (13 → central meridian 75°E).
    zone: int = 13
    # Bursa-Wolf SK-42 → WGS-84 as "dx,dy,dz,rx,ry,rz,ds_ppm".
    datum_shift: str = "23.92,-141.27,-80.9,0,0.35,0.82,-0.12"
    transform_cache_size: int = 5000

    # ── Queries ────────────────────────────────────────────────────
    default_radius_m: float = 300.0
    max_radius_m: float = 5000.0

    # ── Map links ──────────────────────────────────────────────────
    map_zoom: int = 18

    # ── CORS ───────────────────────────────────────────────────────
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse the comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def datum_shift_values(self) -> tuple[float, ...]:
        """Parse the comma-separated datum shift into floats."""
        parts = [p.strip() for p in self.datum_shift.split(",") if p.strip()]
        try:
            return tuple(float(p) for p in parts)
        except ValueError as e:
            raise ConfigurationError(
                f"GRO_DATUM_SHIFT is not a list of numbers: {self.datum_shift!r}"
            ) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
