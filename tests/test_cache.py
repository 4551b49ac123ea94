"""Tests for the LRU, TTL and no-op caches."""

import asyncio

import pytest

from neo_preferences.features.cache import LRUCache, NoOpCache, TTLCache


class TestLRUCache:

    def test_get_returns_cached_metadata(self, clock, metadata_factory):
        cache = LRUCache(max_size=10, default_ttl=1000, clock=clock)
        metadata = metadata_factory(value="dark")

        cache.set("theme", metadata)

        assert cache.get("theme") is metadata
        assert cache.has("theme")

    def test_entry_expires_after_ttl(self, clock, metadata_factory):
        cache = LRUCache(max_size=10, default_ttl=10_000, clock=clock)
        cache.set("theme", metadata_factory(value="dark"), ttl=100)

        clock.advance(150)

        assert cache.get("theme") is None
        assert cache.size() == 0

    def test_entry_alive_at_exact_expiry(self, clock, metadata_factory):
        cache = LRUCache(default_ttl=100, clock=clock)
        cache.set("theme", metadata_factory(value="dark"))

        clock.advance(100)

        assert cache.get("theme") is not None

    def test_zero_ttl_uses_default(self, clock, metadata_factory):
        cache = LRUCache(default_ttl=1000, clock=clock)
        cache.set("theme", metadata_factory(value="dark"), ttl=0)

        clock.advance(500)

        assert cache.has("theme")

    def test_has_removes_expired_entry(self, clock, metadata_factory):
        cache = LRUCache(default_ttl=100, clock=clock)
        cache.set("theme", metadata_factory(value="dark"))

        clock.advance(200)

        assert not cache.has("theme")
        assert cache.size() == 0

    def test_evicts_least_recently_used(self, clock, metadata_factory):
        cache = LRUCache(max_size=3, clock=clock)
        for key in ("a", "b", "c", "d"):
            cache.set(key, metadata_factory(key=key, value=key))

        assert cache.size() == 3
        assert cache.get("a") is None
        assert cache.keys() == ["b", "c", "d"]

    def test_get_protects_key_from_eviction(self, clock, metadata_factory):
        cache = LRUCache(max_size=3, clock=clock)
        for key in ("a", "b", "c"):
            cache.set(key, metadata_factory(key=key, value=key))

        cache.get("a")
        cache.set("d", metadata_factory(key="d", value="d"))

        assert cache.has("a")
        assert not cache.has("b")

    def test_has_does_not_refresh_recency(self, clock, metadata_factory):
        cache = LRUCache(max_size=2, clock=clock)
        cache.set("a", metadata_factory(key="a", value=1))
        cache.set("b", metadata_factory(key="b", value=2))

        cache.has("a")
        cache.set("c", metadata_factory(key="c", value=3))

        assert cache.get("a") is None

    def test_reinsert_does_not_duplicate_key(self, clock, metadata_factory):
        cache = LRUCache(max_size=2, clock=clock)
        cache.set("a", metadata_factory(key="a", value=1))
        cache.set("b", metadata_factory(key="b", value=2))
        cache.set("a", metadata_factory(key="a", value=3))

        assert cache.keys() == ["b", "a"]
        assert cache.get("a").value == 3

    def test_delete_and_clear(self, clock, metadata_factory):
        cache = LRUCache(clock=clock)
        cache.set("a", metadata_factory(key="a", value=1))
        cache.set("b", metadata_factory(key="b", value=2))

        assert cache.delete("a") is True
        assert cache.delete("a") is False

        cache.clear()
        assert cache.size() == 0

    def test_cleanup_removes_only_expired(self, clock, metadata_factory):
        cache = LRUCache(default_ttl=1000, clock=clock)
        cache.set("short", metadata_factory(key="short", value=1), ttl=10)
        cache.set("long", metadata_factory(key="long", value=2))

        clock.advance(50)

        assert cache.cleanup() == 1
        assert cache.keys() == ["long"]


class TestTTLCache:

    def test_unbounded_with_lazy_expiry(self, clock, metadata_factory):
        cache = TTLCache(default_ttl=100, clock=clock)
        for index in range(5):
            cache.set(f"k{index}", metadata_factory(key=f"k{index}", value=index))

        assert cache.size() == 5

        clock.advance(101)

        assert cache.get("k0") is None
        assert cache.cleanup() == 4

    @pytest.mark.asyncio
    async def test_periodic_sweep(self, clock, metadata_factory):
        cache = TTLCache(default_ttl=10, cleanup_interval=5, clock=clock)
        cache.set("a", metadata_factory(key="a", value=1))
        clock.advance(20)

        cache.start_cleanup()
        assert cache.is_cleanup_running
        await asyncio.sleep(0.05)
        await cache.stop_cleanup()

        assert cache.size() == 0
        assert not cache.is_cleanup_running


class TestNoOpCache:

    def test_always_misses(self, metadata_factory):
        cache = NoOpCache()
        cache.set("a", metadata_factory(key="a", value=1))

        assert cache.get("a") is None
        assert not cache.has("a")
        assert cache.delete("a") is False
        assert cache.size() == 0
