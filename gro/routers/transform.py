"""
Manual Transform Endpoints
==========================
Type a coordinate pair, get it back in another system.  A failed
transform is reported as ``available: false``, never as an error.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from gro.config import get_settings
from gro.geodesy.transform import CoordinateTransformer, get_coordinate_transformer
from gro.geodesy.types import GeodeticPoint, PlanarPoint, TransformFailure
from gro.schemas.points import (
    ConvertOut,
    ConvertRequest,
    GeodeticIn,
    GeodeticOut,
    MapLinksOut,
    PlanarIn,
    PlanarOut,
)
from gro.services.maplinks import build_map_links

router = APIRouter(prefix="/transform", tags=["Transform"])
settings = get_settings()


@router.post("/to-geodetic", response_model=GeodeticOut)
def to_geodetic(
    req: PlanarIn,
    transformer: CoordinateTransformer = Depends(get_coordinate_transformer),
):
    """MSK x/y → WGS-84, with map links when available."""
    result = transformer.to_geodetic(PlanarPoint(x=req.x, y=req.y))
    if isinstance(result, TransformFailure):
        return GeodeticOut(x=req.x, y=req.y, available=False, reason=result.reason)

    links = build_map_links(result, zoom=settings.map_zoom)
    return GeodeticOut(
        x=req.x,
        y=req.y,
        lat=result.lat,
        lon=result.lon,
        available=True,
        links=MapLinksOut.model_validate(links) if links else None,
    )


@router.post("/from-geodetic", response_model=PlanarOut)
def from_geodetic(
    req: GeodeticIn,
    transformer: CoordinateTransformer = Depends(get_coordinate_transformer),
):
    """WGS-84 → MSK x/y."""
    result = transformer.from_geodetic(GeodeticPoint(lat=req.lat, lon=req.lon))
    if isinstance(result, TransformFailure):
        return PlanarOut(lat=req.lat, lon=req.lon, available=False, reason=result.reason)
    return PlanarOut(lat=req.lat, lon=req.lon, x=result.x, y=result.y, available=True)


@router.post("/convert", response_model=ConvertOut)
def convert(
    req: ConvertRequest,
    transformer: CoordinateTransformer = Depends(get_coordinate_transformer),
):
    """Any supported system → any supported system."""
    if req.source.is_planar:
        point = PlanarPoint(x=req.a, y=req.b)
    else:
        point = GeodeticPoint(lat=req.a, lon=req.b)

    result = transformer.convert(point, req.source, req.target)
    if isinstance(result, TransformFailure):
        return ConvertOut(
            source=req.source, target=req.target, available=False, reason=result.reason
        )
    if isinstance(result, GeodeticPoint):
        a, b = result.lat, result.lon
    else:
        a, b = result.x, result.y
    return ConvertOut(source=req.source, target=req.target, a=a, b=b, available=True)


@router.get("/cache")
def cache_stats(
    transformer: CoordinateTransformer = Depends(get_coordinate_transformer),
):
    """Transform cache statistics for monitoring."""
    return transformer.cache_stats()
