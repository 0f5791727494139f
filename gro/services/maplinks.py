"""
Map service deep links built from transformer output.

Google takes ``lat,lon``; Yandex takes ``lon,lat``.  A point that failed
to transform gets no links at all.
"""

from __future__ import annotations

from dataclasses import dataclass

from gro.geodesy.types import GeodeticPoint, GeodeticResult

DEFAULT_ZOOM = 18


@dataclass(frozen=True, slots=True)
class MapLinks:
    google: str
    yandex: str


def _coord(value: float) -> str:
    """Fixed-point degrees (never exponent form), trailing zeros dropped."""
    text = f"{value:.7f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def google_maps_url(lat: float, lon: float, zoom: int = DEFAULT_ZOOM) -> str:
    return f"https://www.google.com/maps?q={_coord(lat)},{_coord(lon)}&z={zoom}"


def yandex_maps_url(lat: float, lon: float, zoom: int = DEFAULT_ZOOM) -> str:
    return f"https://yandex.ru/maps/?pt={_coord(lon)},{_coord(lat)}&z={zoom}&l=map"


def build_map_links(
    point: GeodeticResult | None, zoom: int = DEFAULT_ZOOM
) -> MapLinks | None:
    if not isinstance(point, GeodeticPoint) or not point.is_valid:
        return None
    return MapLinks(
        google=google_maps_url(point.lat, point.lon, zoom),
        yandex=yandex_maps_url(point.lat, point.lon, zoom),
    )
