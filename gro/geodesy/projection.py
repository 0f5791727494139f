"""
Projection Engine
=================
Gauss-Krüger (SK-42, Krassovsky 1940) ↔ WGS-84 through pyproj.

Each zone is a transverse Mercator::

    +proj=tmerc +lat_0=0 +lon_0=<zone*6-3> +k=1
    +x_0=<zone*1e6 + 5e5> +y_0=0 +ellps=krass +towgs84=<7 params>

The ``+towgs84`` Bursa-Wolf shift makes PROJ apply the datum change on
the way to / from EPSG:4326.  Bad numeric input never raises: it comes
back as a :class:`TransformFailure`.
"""

from __future__ import annotations

import logging
import math
import threading

from pyproj import CRS, Transformer
from pyproj.exceptions import ProjError

from gro.errors import ConfigurationError
from gro.geodesy.cache import DEFAULT_CAPACITY, TransformCache
from gro.geodesy.types import (
    Direction,
    GeodeticPoint,
    GeodeticResult,
    ProjectedPoint,
    ProjectedResult,
    TransformFailure,
    ZoneConfig,
)

logger = logging.getLogger(__name__)

# 6° zones: central meridians 3°E … 357°E.
SUPPORTED_ZONES = range(1, 61)

WGS84_CRS = CRS.from_epsg(4326)


class ProjectionEngine:
    """
    Planar ↔ geodetic conversion with bounded memoization.

    Transformer pairs are built lazily per :class:`ZoneConfig` and kept
    for the lifetime of the engine; results go through the engine's own
    :class:`TransformCache`.

    Parameters
    ----------
    cache_capacity : int
        Maximum number of memoized results before FIFO eviction.
    """

    def __init__(self, cache_capacity: int = DEFAULT_CAPACITY) -> None:
        self.cache = TransformCache(cache_capacity)
        self._transformers: dict[ZoneConfig, tuple[Transformer, Transformer]] = {}
        self._lock = threading.Lock()

    # ── Transformer table ─────────────────────────────────────

    def prepare(self, zone_config: ZoneConfig) -> None:
        """Build the zone's transformers now; raises ConfigurationError."""
        if zone_config.zone not in SUPPORTED_ZONES:
            raise ConfigurationError(
                f"Zone {zone_config.zone} outside supported range "
                f"{SUPPORTED_ZONES.start}..{SUPPORTED_ZONES.stop - 1}"
            )
        self._get_transformers(zone_config)

    def _get_transformers(
        self, zone_config: ZoneConfig
    ) -> tuple[Transformer, Transformer]:
        with self._lock:
            pair = self._transformers.get(zone_config)
            if pair is None:
                try:
                    zone_crs = CRS.from_proj4(zone_config.proj_string())
                    pair = (
                        Transformer.from_crs(zone_crs, WGS84_CRS, always_xy=True),
                        Transformer.from_crs(WGS84_CRS, zone_crs, always_xy=True),
                    )
                except ProjError as e:
                    logger.error("Failed to build transformers for zone %d: %s", zone_config.zone, e)
                    raise ConfigurationError(
                        f"Invalid projection parameters for zone {zone_config.zone}"
                    ) from e
                self._transformers[zone_config] = pair
                logger.debug("Created SK-42 zone %d transformers", zone_config.zone)
            return pair

    # ── Forward: projected → geodetic ─────────────────────────

    def project(
        self, easting: float, northing: float, zone_config: ZoneConfig
    ) -> GeodeticResult:
        """Gauss-Krüger easting/northing (zone-prefixed) → WGS-84."""
        if not (math.isfinite(easting) and math.isfinite(northing)):
            return TransformFailure("Non-finite projected coordinates")
        if zone_config.zone not in SUPPORTED_ZONES:
            return TransformFailure(f"Unsupported zone {zone_config.zone}")

        key = (easting, northing, Direction.FORWARD, zone_config)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        return self.cache.put(key, self._project(easting, northing, zone_config))

    def _project(
        self, easting: float, northing: float, zone_config: ZoneConfig
    ) -> GeodeticResult:
        try:
            forward, _ = self._get_transformers(zone_config)
            lon, lat = forward.transform(easting, northing, errcheck=True)
        except (ProjError, ConfigurationError) as e:
            logger.debug("project(%r, %r) failed: %s", easting, northing, e)
            return TransformFailure(f"Projection failed: {e}")

        point = GeodeticPoint(lat=float(lat), lon=float(lon))
        if not point.is_valid:
            return TransformFailure(f"Projection produced invalid point {point}")
        return point

    # ── Inverse: geodetic → projected ─────────────────────────

    def unproject(
        self, lat: float, lon: float, zone_config: ZoneConfig
    ) -> ProjectedResult:
        """WGS-84 → Gauss-Krüger easting/northing (zone-prefixed)."""
        if not GeodeticPoint(lat=lat, lon=lon).is_valid:
            return TransformFailure("Invalid geodetic coordinates")
        if zone_config.zone not in SUPPORTED_ZONES:
            return TransformFailure(f"Unsupported zone {zone_config.zone}")

        key = (lat, lon, Direction.INVERSE, zone_config)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        return self.cache.put(key, self._unproject(lat, lon, zone_config))

    def _unproject(
        self, lat: float, lon: float, zone_config: ZoneConfig
    ) -> ProjectedResult:
        try:
            _, inverse = self._get_transformers(zone_config)
            easting, northing = inverse.transform(lon, lat, errcheck=True)
        except (ProjError, ConfigurationError) as e:
            logger.debug("unproject(%r, %r) failed: %s", lat, lon, e)
            return TransformFailure(f"Inverse projection failed: {e}")

        if not (math.isfinite(easting) and math.isfinite(northing)):
            return TransformFailure("Inverse projection produced non-finite output")
        return ProjectedPoint(easting=float(easting), northing=float(northing))

    # ── Monitoring ────────────────────────────────────────────

    def cache_stats(self) -> dict:
        stats = self.cache.stats()
        with self._lock:
            stats["zones"] = sorted({zc.zone for zc in self._transformers})
        return stats
