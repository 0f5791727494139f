"""
Shared fixtures for the GRO Locator test suite.

This conftest provides:
- A zone-13 coordinate transformer (the Balkhash object's zone)
- A fresh record store per test
- Reusable record factories
"""
from __future__ import annotations

import pytest

from gro.geodesy.transform import CoordinateTransformer
from gro.geodesy.types import PlanarPoint, ZoneConfig
from gro.services.records import Record, RecordStore

SAMPLE_ZONE = 13


# ---------------------------------------------------------------------------
# Sample data factories
# ---------------------------------------------------------------------------
def make_record(
    id: str = "rp_2",
    name: str = "Rp-1",
    x: float = 5000.0,
    y: float = 3000.0,
    elevation: float | None = 341.25,
    note: str = "",
) -> Record:
    """Return a survey point at MSK (x, y)."""
    return Record(
        id=id,
        name=name,
        planar=PlanarPoint(x=x, y=y),
        elevation=elevation,
        note=note,
    )


def make_grid_records() -> list[Record]:
    """A small cluster of points around MSK (5 186 000, 512 000)."""
    return [
        make_record(id="rp_2", name="Rp.1", x=5_186_000.0, y=512_000.0),
        make_record(id="rp_3", name="Rp.2", x=5_186_150.0, y=512_000.0),
        make_record(id="rp_4", name="GRO-17", x=5_186_000.0, y=512_250.0),
        make_record(id="rp_5", name="gro_17a", x=5_187_000.0, y=512_000.0, note="well"),
    ]


@pytest.fixture()
def zone_config() -> ZoneConfig:
    return ZoneConfig(zone=SAMPLE_ZONE)


@pytest.fixture()
def transformer(zone_config) -> CoordinateTransformer:
    return CoordinateTransformer(zone_config)


@pytest.fixture()
def grid_records() -> list[Record]:
    return make_grid_records()


@pytest.fixture()
def store(grid_records) -> RecordStore:
    return RecordStore(grid_records)
