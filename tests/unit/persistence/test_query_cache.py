"""Unit tests for the in-memory query cache."""

import threading

import pytest

from board.persistence.cache import InMemoryQueryCache, NullQueryCache
from tests.di import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryQueryCache(default_ttl=300.0, clock=clock)


class TestInMemoryQueryCache:
    """Tests for InMemoryQueryCache."""

    def test_round_trip(self, cache):
        """A value is readable right after it is set."""
        cache.set("posts:a", {"x": 1}, ttl=10)

        assert cache.get("posts:a") == {"x": 1}

    def test_missing_key_is_a_miss(self, cache):
        assert cache.get("nope") is None

    def test_entry_expires_after_ttl(self, cache, clock):
        """Reads after the TTL miss and drop the entry."""
        cache.set("posts:a", "page", ttl=10)

        clock.advance(9.9)
        assert cache.get("posts:a") == "page"

        clock.advance(0.1)
        assert cache.get("posts:a") is None
        assert cache.stats().size == 0

    def test_default_ttl_applies(self, cache, clock):
        cache.set("posts:a", "page")

        clock.advance(299)
        assert cache.get("posts:a") == "page"
        clock.advance(1)
        assert cache.get("posts:a") is None

    def test_set_overwrites_and_refreshes_expiry(self, cache, clock):
        cache.set("k", "old", ttl=5)
        clock.advance(4)

        cache.set("k", "new", ttl=5)
        clock.advance(4)

        assert cache.get("k") == "new"

    def test_none_cannot_be_stored(self, cache):
        """None is the miss marker."""
        with pytest.raises(ValueError):
            cache.set("k", None)

    def test_invalidate_single_key(self, cache):
        cache.set("posts:a", 1)
        cache.set("posts:b", 2)

        cache.invalidate("posts:a")
        cache.invalidate("never-set")

        assert cache.get("posts:a") is None
        assert cache.get("posts:b") == 2

    def test_invalidate_prefix_leaves_other_namespaces(self, cache):
        """Only keys under the prefix are removed."""
        # Arrange
        cache.set("posts:1", "a")
        cache.set("posts:2", "b")
        cache.set("users:1", "c")
        cache.set("postscript", "d")

        # Act
        removed = cache.invalidate_prefix("posts:")

        # Assert
        assert removed == 2
        keys = cache.stats().keys
        assert not any(key.startswith("posts:") for key in keys)
        assert keys == ["postscript", "users:1"]

    def test_stats_skip_expired_entries(self, cache, clock):
        cache.set("short", 1, ttl=1)
        cache.set("long", 2, ttl=100)

        clock.advance(2)
        stats = cache.stats()

        assert stats.size == 1
        assert stats.keys == ["long"]

    def test_clear(self, cache):
        cache.set("a", 1)
        cache.clear()

        assert cache.stats().size == 0

    def test_concurrent_writers_and_invalidations(self):
        """Bookkeeping stays consistent under threads."""
        cache = InMemoryQueryCache(default_ttl=60)

        def writer(n):
            for i in range(200):
                cache.set(f"posts:{n}:{i}", i)
                cache.get(f"posts:{n}:{i}")

        def invalidator():
            for _ in range(50):
                cache.invalidate_prefix("posts:")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        threads.append(threading.Thread(target=invalidator))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        stats = cache.stats()
        assert stats.size == len(stats.keys)
        cache.invalidate_prefix("posts:")
        assert cache.stats().size == 0


class TestNullQueryCache:
    """Tests for the disabled cache."""

    def test_everything_misses(self):
        cache = NullQueryCache()

        cache.set("k", 1)

        assert cache.get("k") is None
        assert cache.invalidate_prefix("k") == 0
        assert cache.stats().size == 0
