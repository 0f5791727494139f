"""
Geodesy Value Types
===================
Immutable points and zone parameters shared by the projection engine,
the coordinate transformer and the query services.

Axis convention of the planar grid (MSK):

    x  is the "north" axis, the projection northing
    y  is the "east" axis, the projection easting minus the zone offset
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

from gro.errors import ConfigurationError

# Bursa-Wolf SK-42 → WGS-84: dx, dy, dz (m), rx, ry, rz (arc-sec), ds (ppm).
DEFAULT_DATUM_SHIFT: tuple[float, ...] = (23.92, -141.27, -80.9, 0.0, 0.35, 0.82, -0.12)


# ── Points ───────────────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class PlanarPoint:
    """A point of the local engineering grid, metres."""

    x: float
    y: float

    @property
    def is_valid(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def distance_to(self, other: PlanarPoint) -> float:
        """Planar Euclidean distance in metres."""
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True, slots=True)
class GeodeticPoint:
    """WGS-84 latitude / longitude in decimal degrees."""

    lat: float
    lon: float

    @property
    def is_valid(self) -> bool:
        return (
            math.isfinite(self.lat)
            and math.isfinite(self.lon)
            and -90.0 <= self.lat <= 90.0
            and -180.0 <= self.lon <= 180.0
        )


@dataclass(frozen=True, slots=True)
class ProjectedPoint:
    """Gauss-Krüger easting / northing; easting carries the zone prefix."""

    easting: float
    northing: float


@dataclass(frozen=True, slots=True)
class TransformFailure:
    """Explicit failure marker returned instead of raising on bad input."""

    reason: str


GeodeticResult = Union[GeodeticPoint, TransformFailure]
ProjectedResult = Union[ProjectedPoint, TransformFailure]
PlanarResult = Union[PlanarPoint, TransformFailure]


class Direction(str, Enum):
    """Transform direction; part of every cache key."""

    FORWARD = "forward"  # projected → geodetic
    INVERSE = "inverse"  # geodetic → projected


# ── Zone parameters ──────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class ZoneConfig:
    """
    A 6°-wide Gauss-Krüger zone on SK-42 plus the datum shift to WGS-84.

    Parameters
    ----------
    zone : int
        Zone number, ``>= 1``.
    datum_shift : tuple of 7 floats
        ``(dx, dy, dz, rx, ry, rz, ds_ppm)`` in PROJ ``+towgs84`` order.
    """

    zone: int
    datum_shift: tuple[float, ...] = DEFAULT_DATUM_SHIFT

    def __post_init__(self) -> None:
        if isinstance(self.zone, bool) or not isinstance(self.zone, int):
            raise ConfigurationError(f"Zone must be an integer, got {self.zone!r}")
        if self.zone < 1:
            raise ConfigurationError(f"Zone must be >= 1, got {self.zone}")

        try:
            shift = tuple(float(v) for v in self.datum_shift)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Datum shift must be numeric: {self.datum_shift!r}"
            ) from e
        if len(shift) != 7:
            raise ConfigurationError(
                f"Datum shift needs 7 parameters, got {len(shift)}"
            )
        if not all(math.isfinite(v) for v in shift):
            raise ConfigurationError(f"Datum shift must be finite: {shift!r}")
        object.__setattr__(self, "datum_shift", shift)

    @property
    def central_meridian(self) -> float:
        """Longitude of the zone's central meridian, degrees East."""
        return float(self.zone * 6 - 3)

    @property
    def zone_offset(self) -> float:
        """The "zone million" prefixed to eastings."""
        return float(self.zone * 1_000_000)

    @property
    def false_easting(self) -> float:
        return float(self.zone * 1_000_000 + 500_000)

    def proj_string(self) -> str:
        """PROJ definition of the zone's transverse Mercator with towgs84."""
        towgs84 = ",".join(repr(v) for v in self.datum_shift)
        return (
            f"+proj=tmerc +lat_0=0 +lon_0={self.central_meridian:g} +k=1 "
            f"+x_0={self.false_easting:.0f} +y_0=0 +ellps=krass "
            f"+towgs84={towgs84} +units=m +no_defs +type=crs"
        )
