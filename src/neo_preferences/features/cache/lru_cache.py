"""Bounded LRU cache with lazy TTL expiry.

Entries live in an ``OrderedDict`` whose order is the recency order: the
front is the least recently used key, the back the most recent one.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ...config.constants import CacheDefaults
from ...core.entities import PreferenceMetadata

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Default cache clock in milliseconds."""
    return time.monotonic() * 1000


@dataclass(frozen=True)
class CacheEntry:
    """Cached metadata with its absolute expiry instant (milliseconds)."""

    metadata: PreferenceMetadata
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class LRUCache:
    """Thread-safe in-memory LRU cache for resolved preference metadata."""

    def __init__(
        self,
        max_size: int = CacheDefaults.MAX_SIZE,
        default_ttl: int = CacheDefaults.TTL_MS,
        clock: Optional[Clock] = None,
    ):
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._clock = clock or monotonic_ms
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    def get(self, key: str) -> Optional[PreferenceMetadata]:
        """Get cached metadata and mark the key most recently used."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None

            self._entries.move_to_end(key)
            return entry.metadata

    def set(self, key: str, metadata: PreferenceMetadata, ttl: Optional[int] = None) -> None:
        """Insert or replace an entry; evicts the LRU entry when over capacity."""
        expires_at = self._clock() + (ttl or self._default_ttl)

        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(metadata=metadata, expires_at=expires_at)

            if len(self._entries) > self._max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted least recently used cache key: {evicted}")

    def has(self, key: str) -> bool:
        """Existence probe; drops an expired entry but leaves recency untouched."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False

            if entry.is_expired(self._clock()):
                del self._entries[key]
                return False

            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def keys(self) -> list:
        """Keys in recency order, least recently used first."""
        with self._lock:
            return list(self._entries.keys())

    def cleanup(self) -> int:
        """Remove every expired entry and return how many were dropped."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.debug(f"Removed {len(expired)} expired cache entries")
        return len(expired)

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_size": self._max_size,
                "default_ttl": self._default_ttl,
            }
