"""Per-session query cache keyed by a logical resource name.

The cache holds the last successful read of a resource. Mutations call
``invalidate(key)`` so the next ``fetch`` goes back to the loader instead of
serving the stale value. There is no TTL: only invalidation expires data.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry:
    value: Any
    fetched_at: float
    stale: bool = False


class QueryCache:
    def __init__(self) -> None:
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def fetch(self, key: str, loader: Callable[[], T]) -> T:
        """Return the cached value for ``key``, loading it when missing or stale.

        Loader errors propagate and leave any previous entry as it was.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and not entry.stale:
                return entry.value

        if entry is None:
            logger.debug("cache miss key=%s", key)
        else:
            logger.debug("cache miss key=%s (stale, loaded %.1fs ago)", key, time.time() - entry.fetched_at)
        value = loader()
        self.set(key, value)
        return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value=value, fetched_at=time.time())

    def invalidate(self, key: str) -> None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                entry.stale = True
        logger.debug("cache invalidated key=%s", key)

    def is_stale(self, key: str) -> bool:
        """True when ``key`` has never been loaded or was invalidated."""
        with self._lock:
            entry = self._entries.get(key)
            return entry is None or entry.stale
