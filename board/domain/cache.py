"""Query cache interface.

A small key/value store for computed read results. Entries expire after a
per-entry time-to-live and can be dropped in bulk by key prefix, which is how
writes keep cached listings consistent.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from board.domain.value.common import ValueObject


class CacheStats(ValueObject):
    """Snapshot of the live (unexpired) entries."""

    size: int
    keys: list[str]


class QueryCache(ABC):
    """Cache for query results.

    ``None`` is reserved to signal a miss and cannot be stored as a value.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the value for key, or None if absent or expired."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store value under key for ttl seconds (the cache default if None)."""
        pass

    @abstractmethod
    def invalidate(self, key: str) -> None:
        pass

    @abstractmethod
    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every entry whose key starts with prefix.

        Returns:
            Number of entries removed
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def stats(self) -> CacheStats:
        pass
