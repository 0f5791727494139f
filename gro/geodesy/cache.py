"""
Bounded transform memo with insertion-order (FIFO) eviction.

Owned by a :class:`~gro.geodesy.projection.ProjectionEngine` instance;
there is no module-level cache.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Hashable

from cachetools import FIFOCache

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 5000


class _LoggingFIFOCache(FIFOCache):
    """A FIFO cache that logs every eviction at debug level."""

    def popitem(self):
        key, value = super().popitem()
        logger.debug("Transform cache full (%d), evicted %r", self.maxsize, key)
        return key, value


class TransformCache:
    """Thread-safe FIFO cache.

    FastAPI runs sync endpoints on a worker pool, so the
    read-check-insert sequence is serialized with a ``threading.Lock``.
    A hit does not refresh an entry: the oldest *insertion* is always
    the next to go.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Cache capacity must be >= 1")
        self.capacity = capacity
        self._entries: FIFOCache = _LoggingFIFOCache(maxsize=capacity)
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: Hashable) -> Any | None:
        with self._lock:
            value = self._entries.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def put(self, key: Hashable, value: Any) -> Any:
        """
        Store *value* under *key* and return the cached value.

        If another thread stored the key first, its value wins and is
        returned, so repeated lookups stay bit-identical.
        """
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries[key] = value
            return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "capacity": self.capacity,
                "hits": self.hits,
                "misses": self.misses,
            }
