"""
Pydantic schemas for API request/response serialization.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gro.geodesy.transform import CoordinateSystem
from gro.geodesy.types import PlanarPoint
from gro.services.records import Record
from gro.services.search import SearchMode


# ═══════════════════════════════════════════════════════════════════
# Record snapshot
# ═══════════════════════════════════════════════════════════════════
class RecordIn(BaseModel):
    """
    One survey point as pushed by the data source.

    Missing or non-finite coordinates are accepted here and dropped by
    the record store, which logs each skipped row.
    """

    id: str = Field(min_length=1)
    name: str = ""
    x: float | None = Field(default=None, description="North axis, MSK metres")
    y: float | None = Field(default=None, description="East axis, MSK metres")
    elevation: float | None = None
    note: str = ""

    def to_record(self) -> Record:
        elevation = self.elevation
        if elevation is not None and not math.isfinite(elevation):
            elevation = None
        return Record(
            id=self.id,
            name=self.name.strip(),
            planar=PlanarPoint(
                x=self.x if self.x is not None else math.nan,
                y=self.y if self.y is not None else math.nan,
            ),
            elevation=elevation,
            note=self.note.strip(),
        )


class RecordsReplaced(BaseModel):
    count: int
    skipped: int


class RecordsSummary(BaseModel):
    count: int


# ═══════════════════════════════════════════════════════════════════
# Point output
# ═══════════════════════════════════════════════════════════════════
class MapLinksOut(BaseModel):
    google: str
    yandex: str

    model_config = {"from_attributes": True}


class PointOut(BaseModel):
    """A record with its WGS-84 position (null when the transform failed)."""

    id: str
    name: str
    x: float = Field(description="North axis, MSK metres")
    y: float = Field(description="East axis, MSK metres")
    elevation: float | None = None
    note: str = ""
    lat: float | None = None
    lon: float | None = None
    links: MapLinksOut | None = None


class NearbyPointOut(PointOut):
    distance: float = Field(description="Planar distance from the origin, m")


class PlanarOriginOut(BaseModel):
    x: float
    y: float


class NearbyResponse(BaseModel):
    origin: PlanarOriginOut
    radius: float
    points: list[NearbyPointOut]


class SearchResponse(BaseModel):
    term: str
    mode: SearchMode
    normalize: bool
    points: list[PointOut]


# ═══════════════════════════════════════════════════════════════════
# Device position (geolocation collaborator)
# ═══════════════════════════════════════════════════════════════════
class PositionFix(BaseModel):
    """A WGS-84 fix reported by the client's geolocation."""

    model_config = ConfigDict(allow_inf_nan=False)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    radius: float | None = Field(default=None, ge=0)


# ═══════════════════════════════════════════════════════════════════
# Manual transforms
# ═══════════════════════════════════════════════════════════════════
class PlanarIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    y: float


class GeodeticIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class GeodeticOut(BaseModel):
    x: float
    y: float
    lat: float | None = None
    lon: float | None = None
    available: bool
    reason: str | None = None
    links: MapLinksOut | None = None


class PlanarOut(BaseModel):
    lat: float
    lon: float
    x: float | None = None
    y: float | None = None
    available: bool
    reason: str | None = None


class ConvertRequest(BaseModel):
    """
    Generic conversion.  ``a``/``b`` are ``x``/``y`` for planar systems
    and ``lat``/``lon`` for WGS-84.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    source: CoordinateSystem
    target: CoordinateSystem
    a: float
    b: float

    @field_validator("source", "target", mode="before")
    @classmethod
    def parse_system(cls, v: object) -> CoordinateSystem:
        return CoordinateSystem.parse(v)


class ConvertOut(BaseModel):
    source: CoordinateSystem
    target: CoordinateSystem
    a: float | None = None
    b: float | None = None
    available: bool
    reason: str | None = None
