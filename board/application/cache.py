"""Listing cache.

Cached post listings live under the ``posts:`` namespace of the query cache.
Any write that can change what a listing shows drops the whole namespace:
listings are keyed by page, sort and search, so there is no cheap way to tell
which of them a single post appears in.

The cache is an optimisation only. Every failure is logged and treated as a
miss, so a broken cache degrades to uncached reads.
"""

import json
from typing import Optional, Type, TypeVar

import logfire
from pydantic import BaseModel

from board.domain.cache import QueryCache
from board.domain.model.post import Post
from board.domain.value import PostId
from board.util.observability import listing_cache_lookups

LISTING_NAMESPACE = "posts"
ANONYMOUS = "anonymous"

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class ListingCache:
    """Post listing namespace on top of a QueryCache."""

    def __init__(self, cache: QueryCache, ttl_seconds: float) -> None:
        """Initialize listing cache.

        Args:
            cache: Shared query cache
            ttl_seconds: Lifetime of a cached listing page
        """
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    @property
    def prefix(self) -> str:
        return f"{LISTING_NAMESPACE}:"

    def key_for(
        self,
        *,
        page: int,
        page_size: int,
        sort: str,
        search: str,
        user_id: Optional[str],
    ) -> str:
        """Derive the cache key for a normalized listing request.

        JSON encoding keeps keys distinct for distinct inputs, whatever
        characters the search term contains.
        """
        parts = [page, page_size, sort, search, user_id or ANONYMOUS]
        return self.prefix + json.dumps(parts, separators=(",", ":"))

    def get(self, key: str, schema: Type[ResponseT]) -> Optional[ResponseT]:
        try:
            raw = self.cache.get(key)
            if raw is None:
                listing_cache_lookups.add(1, {"result": "miss"})
                return None
            cached = schema.model_validate_json(raw)
        except Exception as e:
            listing_cache_lookups.add(1, {"result": "error"})
            logfire.warn("Listing cache read failed", key=key, error=str(e))
            return None
        listing_cache_lookups.add(1, {"result": "hit"})
        return cached

    def put(self, key: str, response: BaseModel) -> None:
        try:
            self.cache.set(key, response.model_dump_json(), ttl=self.ttl_seconds)
        except Exception as e:
            logfire.warn("Listing cache write failed", key=key, error=str(e))

    def invalidate_all(self, reason: str) -> None:
        try:
            removed = self.cache.invalidate_prefix(self.prefix)
            logfire.info("Listing cache invalidated", reason=reason, removed=removed)
        except Exception as e:
            logfire.warn("Listing cache invalidation failed", reason=reason, error=str(e))

    def on_post_created(self, post: Post) -> None:
        """Drop cached listings once a new post is persisted."""
        self.invalidate_all(reason=f"post {post.id} created")

    def on_post_changed(self, post_id: PostId) -> None:
        """Drop cached listings after a post's points or comment count moved."""
        self.invalidate_all(reason=f"post {post_id} changed")
