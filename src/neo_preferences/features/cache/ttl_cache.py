"""Unbounded time-based cache with an optional periodic sweep."""

import asyncio
import logging
import threading
from typing import Dict, Optional

from ...config.constants import CacheDefaults
from ...core.entities import PreferenceMetadata
from .lru_cache import CacheEntry, Clock, monotonic_ms

logger = logging.getLogger(__name__)


class TTLCache:
    """Cache that only expires entries; it never evicts by size.

    Expiry is checked lazily on access. ``start_cleanup`` additionally runs a
    background task on the current event loop that sweeps expired entries
    every ``cleanup_interval`` milliseconds.
    """

    def __init__(
        self,
        default_ttl: int = CacheDefaults.TTL_MS,
        cleanup_interval: int = CacheDefaults.CLEANUP_INTERVAL_MS,
        clock: Optional[Clock] = None,
    ):
        self._default_ttl = default_ttl
        self._cleanup_interval = cleanup_interval
        self._clock = clock or monotonic_ms
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._cleanup_task: Optional[asyncio.Task] = None

    def get(self, key: str) -> Optional[PreferenceMetadata]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None
            return entry.metadata

    def set(self, key: str, metadata: PreferenceMetadata, ttl: Optional[int] = None) -> None:
        expires_at = self._clock() + (ttl or self._default_ttl)
        with self._lock:
            self._entries[key] = CacheEntry(metadata=metadata, expires_at=expires_at)

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def cleanup(self) -> int:
        """Remove expired entries and return how many were dropped."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    @property
    def is_cleanup_running(self) -> bool:
        return self._cleanup_task is not None and not self._cleanup_task.done()

    def start_cleanup(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if self.is_cleanup_running:
            return
        self._cleanup_task = asyncio.get_running_loop().create_task(self._cleanup_loop())

    async def stop_cleanup(self) -> None:
        """Cancel the periodic sweep, if running."""
        task, self._cleanup_task = self._cleanup_task, None
        if task is None:
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self._cleanup_interval / 1000)
            removed = self.cleanup()
            if removed:
                logger.debug(f"TTL sweep removed {removed} expired entries")
