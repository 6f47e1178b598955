"""Query cache implementations."""

import threading
import time
from typing import Any, Callable, NamedTuple, Optional

import logfire

from board.domain.cache import CacheStats, QueryCache


class _Entry(NamedTuple):
    value: Any
    expires_at: float


class InMemoryQueryCache(QueryCache):
    """Process-local cache with per-entry expiry.

    Expired entries are dropped lazily, when a read or a stats scan runs into
    them; there is no background sweeper. All bookkeeping happens under one
    lock, and prefix invalidation swaps in a rebuilt mapping so a concurrent
    reader sees either the old state or the fully invalidated one.
    """

    def __init__(
        self,
        default_ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache.

        Args:
            default_ttl: Seconds an entry lives when set() gets no ttl
            clock: Monotonic time source in seconds (replaceable in tests)
        """
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        if value is None:
            raise ValueError("None cannot be cached, it marks a miss")
        ttl = self.default_ttl if ttl is None else ttl
        with self._lock:
            self._entries[key] = _Entry(value, self._clock() + ttl)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def invalidate_prefix(self, prefix: str) -> int:
        with self._lock:
            kept = {
                key: entry
                for key, entry in self._entries.items()
                if not key.startswith(prefix)
            }
            removed = len(self._entries) - len(kept)
            self._entries = kept
        logfire.debug("Cache prefix invalidated", prefix=prefix, removed=removed)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries = {}

    def stats(self) -> CacheStats:
        with self._lock:
            now = self._clock()
            self._entries = {
                key: entry
                for key, entry in self._entries.items()
                if entry.expires_at > now
            }
            keys = sorted(self._entries)
        return CacheStats(size=len(keys), keys=keys)


class NullQueryCache(QueryCache):
    """Cache that stores nothing; every read is a miss."""

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        pass

    def invalidate(self, key: str) -> None:
        pass

    def invalidate_prefix(self, prefix: str) -> int:
        return 0

    def clear(self) -> None:
        pass

    def stats(self) -> CacheStats:
        return CacheStats(size=0, keys=[])
