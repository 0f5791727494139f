"""
In-memory record snapshot.

The store is the boundary where malformed rows are dropped: anything
with non-finite planar coordinates is logged and skipped, so the query
services can assume a clean list.  A replacement swaps the whole
snapshot at once; readers keep scanning the tuple they already hold.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

from gro.geodesy.types import PlanarPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Record:
    """A named survey point in the planar grid."""

    id: str
    name: str
    planar: PlanarPoint
    elevation: float | None = None
    note: str = ""


@dataclass(frozen=True, slots=True)
class ReplaceResult:
    count: int
    skipped: int


class RecordStore:
    """Holds the current immutable snapshot of records."""

    def __init__(self, records: Iterable[Record] = ()) -> None:
        self._lock = threading.Lock()
        self._records: tuple[Record, ...] = ()
        self._by_id: dict[str, Record] = {}
        if records:
            self.replace(records)

    def __len__(self) -> int:
        return len(self._records)

    def replace(self, records: Iterable[Record]) -> ReplaceResult:
        """Swap in a new snapshot, skipping invalid and duplicate rows."""
        kept: list[Record] = []
        by_id: dict[str, Record] = {}
        skipped = 0

        for record in records:
            if not record.planar.is_valid:
                logger.warning(
                    "Skipping record %s (%r): non-finite coordinates",
                    record.id, record.name,
                )
                skipped += 1
                continue
            if record.id in by_id:
                logger.warning("Skipping record %s: duplicate id", record.id)
                skipped += 1
                continue
            by_id[record.id] = record
            kept.append(record)

        with self._lock:
            self._records = tuple(kept)
            self._by_id = by_id

        logger.info("Record snapshot replaced: %d kept, %d skipped", len(kept), skipped)
        return ReplaceResult(count=len(kept), skipped=skipped)

    def snapshot(self) -> tuple[Record, ...]:
        with self._lock:
            return self._records

    def get(self, record_id: str) -> Record | None:
        with self._lock:
            return self._by_id.get(record_id)


@lru_cache(maxsize=1)
def get_record_store() -> RecordStore:
    """Return the process-wide record store."""
    return RecordStore()
