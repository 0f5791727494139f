"""
Tests for gro.geodesy.types: points and ZoneConfig.
"""
from __future__ import annotations

import math

import pytest

from gro.errors import ConfigurationError
from gro.geodesy.types import (
    DEFAULT_DATUM_SHIFT,
    GeodeticPoint,
    PlanarPoint,
    ZoneConfig,
)


# ═══════════════════════════════════════════════════════════════════
# PlanarPoint
# ═══════════════════════════════════════════════════════════════════
class TestPlanarPoint:
    @pytest.mark.parametrize("x,y,valid", [
        (0.0, 0.0, True),
        (5_186_000.0, 512_000.0, True),
        (math.nan, 1.0, False),
        (1.0, math.inf, False),
        (-math.inf, 0.0, False),
    ])
    def test_is_valid(self, x, y, valid):
        assert PlanarPoint(x, y).is_valid is valid

    def test_distance(self):
        a = PlanarPoint(5000.0, 3000.0)
        b = PlanarPoint(5300.0, 3400.0)
        assert a.distance_to(b) == 500.0

    def test_distance_symmetry(self):
        a = PlanarPoint(5_186_000.123, 512_000.987)
        b = PlanarPoint(5_185_873.5, 512_431.25)
        assert a.distance_to(b) == b.distance_to(a)

    def test_frozen(self):
        p = PlanarPoint(1.0, 2.0)
        with pytest.raises(AttributeError):
            p.x = 5.0  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════
# GeodeticPoint
# ═══════════════════════════════════════════════════════════════════
class TestGeodeticPoint:
    @pytest.mark.parametrize("lat,lon,valid", [
        (46.8, 75.0, True),
        (90.0, 180.0, True),
        (-90.0, -180.0, True),
        (90.0001, 0.0, False),
        (0.0, -180.5, False),
        (math.nan, 75.0, False),
        (46.8, math.inf, False),
    ])
    def test_is_valid(self, lat, lon, valid):
        assert GeodeticPoint(lat, lon).is_valid is valid


# ═══════════════════════════════════════════════════════════════════
# ZoneConfig
# ═══════════════════════════════════════════════════════════════════
class TestZoneConfig:
    def test_derived_constants_zone_13(self):
        zc = ZoneConfig(zone=13)
        assert zc.central_meridian == 75.0
        assert zc.zone_offset == 13_000_000.0
        assert zc.false_easting == 13_500_000.0

    @pytest.mark.parametrize("zone,meridian", [(1, 3.0), (7, 39.0), (30, 177.0)])
    def test_central_meridian(self, zone, meridian):
        assert ZoneConfig(zone=zone).central_meridian == meridian

    def test_default_datum_shift(self):
        assert ZoneConfig(zone=13).datum_shift == DEFAULT_DATUM_SHIFT

    def test_datum_shift_coerced_to_float_tuple(self):
        zc = ZoneConfig(zone=13, datum_shift=[1, 2, 3, 0, 0, 0, 0])
        assert zc.datum_shift == (1.0, 2.0, 3.0, 0.0, 0.0, 0.0, 0.0)
        assert all(isinstance(v, float) for v in zc.datum_shift)

    def test_hashable(self):
        assert hash(ZoneConfig(zone=13)) == hash(ZoneConfig(zone=13))
        assert ZoneConfig(zone=13) != ZoneConfig(zone=14)

    @pytest.mark.parametrize("zone", [0, -1, None, "13", 13.0, True])
    def test_invalid_zone(self, zone):
        with pytest.raises(ConfigurationError):
            ZoneConfig(zone=zone)

    @pytest.mark.parametrize("shift", [
        (1, 2, 3),
        (1, 2, 3, 4, 5, 6, 7, 8),
        (1, 2, 3, 4, 5, 6, math.nan),
        ("a", 2, 3, 4, 5, 6, 7),
        None,
    ])
    def test_invalid_datum_shift(self, shift):
        with pytest.raises(ConfigurationError):
            ZoneConfig(zone=13, datum_shift=shift)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            ZoneConfig(zone=0)

    def test_proj_string(self):
        proj = ZoneConfig(zone=13).proj_string()
        assert "+proj=tmerc" in proj
        assert "+lat_0=0" in proj
        assert "+lon_0=75" in proj
        assert "+k=1" in proj
        assert "+x_0=13500000" in proj
        assert "+y_0=0" in proj
        assert "+ellps=krass" in proj
        assert "+towgs84=23.92,-141.27,-80.9,0.0,0.35,0.82,-0.12" in proj
