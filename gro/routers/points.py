"""
Point Query Endpoints
=====================
Name search and proximity queries over the current record snapshot.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from gro.config import get_settings
from gro.errors import QueryError
from gro.geodesy.transform import CoordinateTransformer, get_coordinate_transformer
from gro.geodesy.types import GeodeticPoint, TransformFailure
from gro.schemas.points import (
    MapLinksOut,
    NearbyPointOut,
    NearbyResponse,
    PlanarOriginOut,
    PointOut,
    PositionFix,
    SearchResponse,
)
from gro.services.maplinks import build_map_links
from gro.services.records import Record, RecordStore, get_record_store
from gro.services.search import SearchMode, TextSearchService
from gro.services.spatial import NearbyResult, SpatialQueryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/points", tags=["Points"])
settings = get_settings()


def build_point_out(record: Record, transformer: CoordinateTransformer) -> PointOut:
    """Decorate a record with WGS-84 coordinates and map links."""
    geodetic = transformer.to_geodetic(record.planar)
    if isinstance(geodetic, TransformFailure):
        logger.warning("No WGS-84 position for %s: %s", record.id, geodetic.reason)
        lat = lon = None
    else:
        lat, lon = geodetic.lat, geodetic.lon

    links = build_map_links(geodetic, zoom=settings.map_zoom)
    return PointOut(
        id=record.id,
        name=record.name,
        x=record.planar.x,
        y=record.planar.y,
        elevation=record.elevation,
        note=record.note,
        lat=lat,
        lon=lon,
        links=MapLinksOut.model_validate(links) if links else None,
    )


def _nearby_out(
    result: NearbyResult, transformer: CoordinateTransformer
) -> NearbyPointOut:
    point = build_point_out(result.record, transformer)
    return NearbyPointOut(**point.model_dump(), distance=result.distance)


def _resolve_radius(radius: float | None) -> float:
    value = settings.default_radius_m if radius is None else radius
    if value > settings.max_radius_m:
        raise HTTPException(
            422, f"Radius {value} m exceeds the maximum of {settings.max_radius_m} m"
        )
    return value


# ── Text search ───────────────────────────────────────────────────
@router.get("/search", response_model=SearchResponse)
def search_points(
    q: str = Query(default="", description="Point name or fragment"),
    mode: SearchMode = SearchMode.CONTAINS,
    normalize: bool = Query(default=False, description="Ignore . _ , - in names"),
    store: RecordStore = Depends(get_record_store),
    transformer: CoordinateTransformer = Depends(get_coordinate_transformer),
):
    """Search point names; results keep the snapshot order."""
    records = TextSearchService().search(store.snapshot(), q.strip(), mode, normalize)
    return SearchResponse(
        term=q,
        mode=mode,
        normalize=normalize,
        points=[build_point_out(r, transformer) for r in records],
    )


# ── Neighbours of a record ────────────────────────────────────────
@router.get("/{record_id}/nearby", response_model=NearbyResponse)
def nearby_record(
    record_id: str,
    radius: float | None = Query(default=None, ge=0, description="Metres"),
    store: RecordStore = Depends(get_record_store),
    transformer: CoordinateTransformer = Depends(get_coordinate_transformer),
):
    """Points within *radius* metres of a record, excluding the record."""
    record = store.get(record_id)
    if record is None:
        raise HTTPException(404, "Point not found")

    radius_m = _resolve_radius(radius)
    try:
        results = SpatialQueryService().nearby_record(store.snapshot(), record, radius_m)
    except QueryError as e:
        raise HTTPException(422, str(e)) from e

    return NearbyResponse(
        origin=PlanarOriginOut(x=record.planar.x, y=record.planar.y),
        radius=radius_m,
        points=[_nearby_out(r, transformer) for r in results],
    )


# ── Neighbours of a device position ───────────────────────────────
@router.post("/nearby", response_model=NearbyResponse)
def nearby_position(
    fix: PositionFix,
    store: RecordStore = Depends(get_record_store),
    transformer: CoordinateTransformer = Depends(get_coordinate_transformer),
):
    """
    Points near a WGS-84 position.

    The position is mapped into MSK first; ``origin`` in the response is
    that planar image.
    """
    radius_m = _resolve_radius(fix.radius)
    spatial_svc = SpatialQueryService(transformer)
    try:
        located = spatial_svc.nearby_from_geodetic(
            store.snapshot(),
            GeodeticPoint(lat=fix.latitude, lon=fix.longitude),
            radius_m,
        )
    except QueryError as e:
        raise HTTPException(422, str(e)) from e

    return NearbyResponse(
        origin=PlanarOriginOut(x=located.origin.x, y=located.origin.y),
        radius=radius_m,
        points=[_nearby_out(r, transformer) for r in located.points],
    )
