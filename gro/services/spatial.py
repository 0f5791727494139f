"""
Spatial Query Service
=====================
Proximity queries over a record snapshot in the MSK grid.

Distances are planar Euclidean::

    d = hypot(x₂ − x₁, y₂ − y₁)

which holds because the grid is locally flat at the scale of interest
(hundreds of metres).  Each call is a fresh linear scan: no index is
kept between calls.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from gro.errors import ConfigurationError, QueryError
from gro.geodesy.transform import CoordinateTransformer
from gro.geodesy.types import GeodeticPoint, PlanarPoint, TransformFailure
from gro.services.records import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NearbyResult:
    record: Record
    distance: float


@dataclass(frozen=True, slots=True)
class LocatedNearby:
    """Result of a query whose origin was given in WGS-84."""

    origin: PlanarPoint
    points: list[NearbyResult]


class SpatialQueryService:
    """
    Nearest-neighbour search in the planar grid.

    Parameters
    ----------
    transformer : CoordinateTransformer, optional
        Only needed for :meth:`nearby_from_geodetic`.
    """

    def __init__(self, transformer: CoordinateTransformer | None = None) -> None:
        self.transformer = transformer

    # ── Planar origin ─────────────────────────────────────────

    def nearby(
        self,
        records: Sequence[Record],
        origin: PlanarPoint,
        radius: float,
        exclude_id: str | None = None,
    ) -> list[NearbyResult]:
        """
        Records within *radius* metres of *origin*, nearest first.

        The interval is closed (``distance <= radius``).  Records with
        non-finite coordinates are skipped; an invalid origin or radius
        raises :class:`QueryError`.
        """
        if not origin.is_valid:
            raise QueryError(f"Invalid query origin {origin}")
        _check_radius(radius)

        results: list[NearbyResult] = []
        for record in records:
            if exclude_id is not None and record.id == exclude_id:
                continue
            if not record.planar.is_valid:
                continue
            distance = origin.distance_to(record.planar)
            if distance <= radius:
                results.append(NearbyResult(record=record, distance=distance))

        results.sort(key=lambda r: r.distance)
        return results

    def nearby_record(
        self,
        records: Sequence[Record],
        reference: Record,
        radius: float,
    ) -> list[NearbyResult]:
        """Neighbours of *reference*, never including the record itself."""
        return self.nearby(records, reference.planar, radius, exclude_id=reference.id)

    # ── Geodetic origin ───────────────────────────────────────

    def nearby_from_geodetic(
        self,
        records: Sequence[Record],
        origin: GeodeticPoint,
        radius: float,
    ) -> LocatedNearby:
        """
        Map a WGS-84 origin (e.g. a device position) into MSK, then
        search.  If the origin cannot be mapped the whole call fails.
        """
        if self.transformer is None:
            raise ConfigurationError("No coordinate transformer configured")
        if not origin.is_valid:
            raise QueryError(f"Invalid geodetic origin {origin}")

        planar = self.transformer.from_geodetic(origin)
        if isinstance(planar, TransformFailure):
            logger.warning("Could not map %s into the planar grid: %s", origin, planar.reason)
            raise QueryError(f"Cannot map origin into the planar grid: {planar.reason}")

        return LocatedNearby(origin=planar, points=self.nearby(records, planar, radius))


def _check_radius(radius: float) -> None:
    if not math.isfinite(radius) or radius < 0:
        raise QueryError(f"Radius must be a finite non-negative number, got {radius!r}")
