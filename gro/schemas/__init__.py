"""Schemas subpackage: Pydantic request/response models."""

from gro.schemas.points import (
    ConvertOut,
    ConvertRequest,
    GeodeticIn,
    GeodeticOut,
    MapLinksOut,
    NearbyPointOut,
    NearbyResponse,
    PlanarIn,
    PlanarOriginOut,
    PlanarOut,
    PointOut,
    PositionFix,
    RecordIn,
    RecordsReplaced,
    RecordsSummary,
    SearchResponse,
)

__all__ = [
    "ConvertOut",
    "ConvertRequest",
    "GeodeticIn",
    "GeodeticOut",
    "MapLinksOut",
    "NearbyPointOut",
    "NearbyResponse",
    "PlanarIn",
    "PlanarOriginOut",
    "PlanarOut",
    "PointOut",
    "PositionFix",
    "RecordIn",
    "RecordsReplaced",
    "RecordsSummary",
    "SearchResponse",
]
