"""
Coordinate Transformation Engine
=================================
Bridges the three coordinate systems a GRO point can be expressed in:

1. **MSK**: local planar engineering grid (x = north, y = east), metres.
2. **SK-42**: Gauss-Krüger zone on Krassovsky 1940; same axes as MSK
   but the easting carries the "zone million" prefix.
3. **WGS-84**: latitude / longitude for map services.

The fundamental relationship:

    easting  = y_msk + zone × 1 000 000
    northing = x_msk

Swapping the axes or dropping the zone offset still yields plausible
coordinates, just in the wrong place.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Callable, Sequence, Union

from gro.config import get_settings
from gro.errors import ConfigurationError
from gro.geodesy.cache import DEFAULT_CAPACITY
from gro.geodesy.projection import ProjectionEngine
from gro.geodesy.types import (
    DEFAULT_DATUM_SHIFT,
    GeodeticPoint,
    GeodeticResult,
    PlanarPoint,
    PlanarResult,
    TransformFailure,
    ZoneConfig,
)

AnyPoint = Union[PlanarPoint, GeodeticPoint]
AnyResult = Union[PlanarPoint, GeodeticPoint, TransformFailure]


# ── Coordinate systems ───────────────────────────────────────────
class CoordinateSystem(str, Enum):
    """Closed set of supported systems; unknown tags are rejected."""

    MSK = "msk"
    SK42 = "sk42"
    WGS84 = "wgs84"

    @classmethod
    def parse(cls, tag: str | CoordinateSystem) -> CoordinateSystem:
        """Case-insensitive lookup accepting ``sk-42`` / ``wgs-84`` spellings."""
        if isinstance(tag, cls):
            return tag
        key = str(tag).strip().lower().replace("-", "")
        try:
            return cls(key)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(
                f"Unknown coordinate system {tag!r}; expected one of: {allowed}"
            ) from None

    @property
    def is_planar(self) -> bool:
        return self is not CoordinateSystem.WGS84


# ── Coordinate Transformer ───────────────────────────────────────
class CoordinateTransformer:
    """
    MSK ↔ SK-42 ↔ WGS-84 for one fixed zone.

    Parameters
    ----------
    zone_config : ZoneConfig
        Zone number and datum shift; fixed for the instance lifetime.
    engine : ProjectionEngine, optional
        Engine owning the transform cache.  A private one is created
        when omitted.

    Raises
    ------
    ConfigurationError
        If the zone is missing or cannot be turned into a projection.
    """

    def __init__(
        self,
        zone_config: ZoneConfig | None,
        engine: ProjectionEngine | None = None,
    ) -> None:
        if zone_config is None:
            raise ConfigurationError("A zone configuration is required")
        self.zone_config = zone_config
        self.engine = engine if engine is not None else ProjectionEngine()
        self.engine.prepare(zone_config)

        S = CoordinateSystem
        self._conversions: dict[
            tuple[CoordinateSystem, CoordinateSystem], Callable[[AnyPoint], AnyResult]
        ] = {
            (S.MSK, S.MSK): self._identity,
            (S.MSK, S.SK42): self._msk_to_sk42,
            (S.MSK, S.WGS84): self.to_geodetic,
            (S.SK42, S.MSK): self._sk42_to_msk,
            (S.SK42, S.SK42): self._identity,
            (S.SK42, S.WGS84): self._sk42_to_geodetic,
            (S.WGS84, S.MSK): self.from_geodetic,
            (S.WGS84, S.SK42): self._geodetic_to_sk42,
            (S.WGS84, S.WGS84): self._identity,
        }

    @classmethod
    def from_zone(
        cls,
        zone: int | None,
        datum_shift: Sequence[float] | None = None,
        cache_capacity: int = DEFAULT_CAPACITY,
    ) -> CoordinateTransformer:
        """Build from a bare zone number (and optional datum shift)."""
        if zone is None:
            raise ConfigurationError("Zone is required")
        shift = tuple(datum_shift) if datum_shift is not None else DEFAULT_DATUM_SHIFT
        return cls(
            ZoneConfig(zone=zone, datum_shift=shift),
            engine=ProjectionEngine(cache_capacity=cache_capacity),
        )

    # ── Derived zone constants ────────────────────────────────

    @property
    def zone(self) -> int:
        return self.zone_config.zone

    @property
    def zone_offset(self) -> float:
        return self.zone_config.zone_offset

    @property
    def central_meridian(self) -> float:
        return self.zone_config.central_meridian

    # ── MSK ↔ WGS-84 ──────────────────────────────────────────

    def to_geodetic(self, planar: PlanarPoint) -> GeodeticResult:
        """MSK → WGS-84 via the zone's Gauss-Krüger projection."""
        if not planar.is_valid:
            return TransformFailure("Non-finite planar coordinates")
        return self.engine.project(
            easting=planar.y + self.zone_offset,
            northing=planar.x,
            zone_config=self.zone_config,
        )

    def from_geodetic(self, point: GeodeticPoint) -> PlanarResult:
        """WGS-84 → MSK."""
        projected = self.engine.unproject(point.lat, point.lon, self.zone_config)
        if isinstance(projected, TransformFailure):
            return projected
        return PlanarPoint(
            x=projected.northing,
            y=projected.easting - self.zone_offset,
        )

    # ── Generic conversion table ──────────────────────────────

    def convert(
        self,
        point: AnyPoint,
        source: CoordinateSystem | str,
        target: CoordinateSystem | str,
    ) -> AnyResult:
        """
        Convert *point* between any two supported systems.

        Planar systems (MSK, SK-42) take and return :class:`PlanarPoint`;
        WGS-84 takes and returns :class:`GeodeticPoint`.
        """
        source = CoordinateSystem.parse(source)
        target = CoordinateSystem.parse(target)
        expected = PlanarPoint if source.is_planar else GeodeticPoint
        if not isinstance(point, expected):
            raise TypeError(
                f"{source.value} input must be a {expected.__name__}, "
                f"got {type(point).__name__}"
            )
        return self._conversions[(source, target)](point)

    @staticmethod
    def _identity(point: AnyPoint) -> AnyResult:
        if not point.is_valid:
            return TransformFailure("Invalid input coordinates")
        return point

    def _msk_to_sk42(self, planar: PlanarPoint) -> PlanarResult:
        if not planar.is_valid:
            return TransformFailure("Non-finite planar coordinates")
        return PlanarPoint(x=planar.x, y=planar.y + self.zone_offset)

    def _sk42_to_msk(self, planar: PlanarPoint) -> PlanarResult:
        if not planar.is_valid:
            return TransformFailure("Non-finite planar coordinates")
        return PlanarPoint(x=planar.x, y=planar.y - self.zone_offset)

    def _sk42_to_geodetic(self, planar: PlanarPoint) -> GeodeticResult:
        return self.engine.project(
            easting=planar.y, northing=planar.x, zone_config=self.zone_config
        )

    def _geodetic_to_sk42(self, point: GeodeticPoint) -> PlanarResult:
        projected = self.engine.unproject(point.lat, point.lon, self.zone_config)
        if isinstance(projected, TransformFailure):
            return projected
        return PlanarPoint(x=projected.northing, y=projected.easting)

    def cache_stats(self) -> dict:
        return self.engine.cache_stats()


@lru_cache(maxsize=1)
def get_coordinate_transformer() -> CoordinateTransformer:
    """Return the transformer configured from settings (one per process)."""
    settings = get_settings()
    return CoordinateTransformer(
        ZoneConfig(zone=settings.zone, datum_shift=settings.datum_shift_values),
        engine=ProjectionEngine(cache_capacity=settings.transform_cache_size),
    )
