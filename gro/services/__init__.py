"""Services subpackage: record snapshot, queries and map links."""

from gro.services.maplinks import MapLinks, build_map_links
from gro.services.records import Record, RecordStore, get_record_store
from gro.services.search import SearchMode, TextSearchService, normalize_name
from gro.services.spatial import LocatedNearby, NearbyResult, SpatialQueryService

__all__ = [
    "LocatedNearby",
    "MapLinks",
    "NearbyResult",
    "Record",
    "RecordStore",
    "SearchMode",
    "SpatialQueryService",
    "TextSearchService",
    "build_map_links",
    "get_record_store",
    "normalize_name",
]
