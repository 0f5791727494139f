"""Geodesy subpackage: MSK / SK-42 / WGS-84 transforms."""

from gro.geodesy.cache import TransformCache
from gro.geodesy.projection import ProjectionEngine
from gro.geodesy.transform import (
    CoordinateSystem,
    CoordinateTransformer,
    get_coordinate_transformer,
)
from gro.geodesy.types import (
    GeodeticPoint,
    PlanarPoint,
    ProjectedPoint,
    TransformFailure,
    ZoneConfig,
)

__all__ = [
    "CoordinateSystem",
    "CoordinateTransformer",
    "GeodeticPoint",
    "PlanarPoint",
    "ProjectedPoint",
    "ProjectionEngine",
    "TransformCache",
    "TransformFailure",
    "ZoneConfig",
    "get_coordinate_transformer",
]
