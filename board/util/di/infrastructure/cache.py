"""Cache infrastructure providers."""

from dishka import Scope, provide
import logfire

from board.config import Settings
from board.domain.cache import QueryCache
from board.persistence.cache import InMemoryQueryCache, NullQueryCache
from board.util.di.base import ProviderBase


class CacheProvider(ProviderBase):
    """Query cache component base."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production cache provider: one in-process cache per container."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_query_cache(self, settings: Settings) -> QueryCache:
        """Provide the shared query cache."""
        if not settings.cache.enabled:
            logfire.info("Query cache disabled")
            return NullQueryCache()
        return InMemoryQueryCache(default_ttl=settings.cache.ttl_seconds)
