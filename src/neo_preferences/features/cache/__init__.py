"""Read caches for resolved preference metadata."""

from .lru_cache import LRUCache, CacheEntry, monotonic_ms
from .ttl_cache import TTLCache
from .noop_cache import NoOpCache

__all__ = [
    "LRUCache",
    "CacheEntry",
    "monotonic_ms",
    "TTLCache",
    "NoOpCache",
]
