"""
Tests for gro.services.spatial: SpatialQueryService.
"""
from __future__ import annotations

import math
from unittest.mock import MagicMock

import pytest

from gro.errors import ConfigurationError, QueryError
from gro.geodesy.types import GeodeticPoint, PlanarPoint, TransformFailure
from gro.services.spatial import LocatedNearby, SpatialQueryService

from tests.conftest import make_record


class TestNearby:
    @pytest.fixture()
    def svc(self):
        return SpatialQueryService()

    # ── Radius boundary ───────────────────────────────────────

    def test_within_and_beyond_radius(self, svc):
        records = [
            make_record(id="near", x=5200.0, y=3000.0),
            make_record(id="far", x=5301.0, y=3000.0),
        ]
        results = svc.nearby(records, PlanarPoint(5000.0, 3000.0), 300.0)
        assert [r.record.id for r in results] == ["near"]
        assert results[0].distance == 200.0

    def test_radius_is_inclusive(self, svc):
        records = [make_record(id="edge", x=5300.0, y=3000.0)]
        results = svc.nearby(records, PlanarPoint(5000.0, 3000.0), 300.0)
        assert len(results) == 1
        assert results[0].distance == 300.0

    def test_just_past_radius_excluded(self, svc):
        records = [make_record(id="past", x=5300.000001, y=3000.0)]
        assert svc.nearby(records, PlanarPoint(5000.0, 3000.0), 300.0) == []

    def test_zero_radius_matches_coincident_point(self, svc):
        records = [make_record(id="same", x=5000.0, y=3000.0)]
        results = svc.nearby(records, PlanarPoint(5000.0, 3000.0), 0.0)
        assert [r.record.id for r in results] == ["same"]

    def test_diagonal_distance(self, svc):
        records = [make_record(id="diag", x=5300.0, y=3400.0)]
        results = svc.nearby(records, PlanarPoint(5000.0, 3000.0), 500.0)
        assert results[0].distance == 500.0

    # ── Ordering & filtering ──────────────────────────────────

    def test_sorted_by_distance(self, svc, grid_records):
        origin = PlanarPoint(5_186_000.0, 512_000.0)
        results = svc.nearby(grid_records, origin, 300.0)
        assert [r.record.id for r in results] == ["rp_2", "rp_3", "rp_4"]
        distances = [r.distance for r in results]
        assert distances == sorted(distances)

    def test_exclude_id(self, svc, grid_records):
        origin = PlanarPoint(5_186_000.0, 512_000.0)
        results = svc.nearby(grid_records, origin, 300.0, exclude_id="rp_2")
        assert "rp_2" not in [r.record.id for r in results]

    def test_skips_invalid_records(self, svc):
        records = [
            make_record(id="bad_x", x=math.nan, y=3000.0),
            make_record(id="bad_y", x=5000.0, y=math.inf),
            make_record(id="ok", x=5010.0, y=3000.0),
        ]
        results = svc.nearby(records, PlanarPoint(5000.0, 3000.0), 100.0)
        assert [r.record.id for r in results] == ["ok"]

    def test_empty_records(self, svc):
        assert svc.nearby([], PlanarPoint(5000.0, 3000.0), 300.0) == []

    # ── Invalid input ─────────────────────────────────────────

    @pytest.mark.parametrize("origin", [
        PlanarPoint(math.nan, 3000.0),
        PlanarPoint(5000.0, -math.inf),
    ])
    def test_invalid_origin(self, svc, origin):
        with pytest.raises(QueryError):
            svc.nearby([make_record()], origin, 300.0)

    @pytest.mark.parametrize("radius", [-1.0, math.nan, math.inf])
    def test_invalid_radius(self, svc, radius):
        with pytest.raises(QueryError):
            svc.nearby([make_record()], PlanarPoint(5000.0, 3000.0), radius)

    def test_query_error_is_value_error(self, svc):
        with pytest.raises(ValueError):
            svc.nearby([], PlanarPoint(5000.0, 3000.0), -5.0)


class TestNearbyRecord:
    @pytest.fixture()
    def svc(self):
        return SpatialQueryService()

    def test_never_contains_reference(self, svc, grid_records):
        reference = grid_records[0]
        results = svc.nearby_record(grid_records, reference, 10_000.0)
        assert reference.id not in [r.record.id for r in results]
        assert len(results) == len(grid_records) - 1

    def test_symmetry(self, svc, grid_records):
        a, b = grid_records[0], grid_records[1]
        from_a = {r.record.id: r.distance for r in svc.nearby_record(grid_records, a, 300.0)}
        from_b = {r.record.id: r.distance for r in svc.nearby_record(grid_records, b, 300.0)}
        assert b.id in from_a
        assert a.id in from_b
        assert from_a[b.id] == from_b[a.id]

    def test_coincident_twin_is_a_neighbour(self, svc):
        """Another record at the same spot is found; only the reference is excluded."""
        reference = make_record(id="a", x=5000.0, y=3000.0)
        twin = make_record(id="b", x=5000.0, y=3000.0)
        results = svc.nearby_record([reference, twin], reference, 300.0)
        assert [(r.record.id, r.distance) for r in results] == [("b", 0.0)]


class TestNearbyFromGeodetic:
    def test_round_tripped_origin(self, transformer, grid_records):
        svc = SpatialQueryService(transformer)
        target = grid_records[0]
        geodetic = transformer.to_geodetic(target.planar)
        assert isinstance(geodetic, GeodeticPoint)

        located = svc.nearby_from_geodetic(grid_records, geodetic, 300.0)
        assert isinstance(located, LocatedNearby)
        assert located.origin.x == pytest.approx(target.planar.x, abs=0.01)
        assert located.origin.y == pytest.approx(target.planar.y, abs=0.01)
        assert located.points[0].record.id == target.id
        assert located.points[0].distance == pytest.approx(0.0, abs=0.01)

    def test_transform_failure_raises(self, grid_records):
        transformer = MagicMock()
        transformer.from_geodetic.return_value = TransformFailure("boom")
        svc = SpatialQueryService(transformer)
        with pytest.raises(QueryError, match="boom"):
            svc.nearby_from_geodetic(grid_records, GeodeticPoint(46.8, 75.0), 300.0)

    def test_invalid_origin(self, transformer, grid_records):
        svc = SpatialQueryService(transformer)
        with pytest.raises(QueryError):
            svc.nearby_from_geodetic(grid_records, GeodeticPoint(123.0, 75.0), 300.0)

    def test_requires_transformer(self, grid_records):
        svc = SpatialQueryService()
        with pytest.raises(ConfigurationError):
            svc.nearby_from_geodetic(grid_records, GeodeticPoint(46.8, 75.0), 300.0)
