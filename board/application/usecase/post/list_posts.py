"""List posts use case."""

import asyncio
import math
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from board.application.cache import ListingCache
from board.application.usecase.base import BaseUseCase
from board.config import ListingSettings
from board.domain.model.post import Post
from board.domain.repository import VoteRepository, build_post_filter
from board.domain.repository.post import PostRepository, PostSortOrder
from board.domain.value import PostKind, UserId, VotableType, VoteDirection
from board.util.observability import vote_lookup_failures

# Largest OFFSET a store must accept (PostgreSQL binds it as bigint)
MAX_OFFSET = 2**63 - 1


class PostListItem(BaseModel):
    """Post list item in response."""

    post_id: str
    title: str
    kind: PostKind
    url: str | None
    text: str | None
    author_id: str
    author_username: str
    points: int
    comment_count: int
    created_at: datetime
    user_vote: VoteDirection


class ListPostsRequest(BaseModel):
    """List posts request.

    Page and page size are clamped rather than rejected: a missing, zero or
    negative value falls back to the default.
    """

    page: int | None = None
    page_size: int | None = None
    sort: PostSortOrder | None = None
    search: str | None = None
    user_id: str | None = None  # Current user ID (if authenticated)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostListItem]
    total: int
    page: int
    page_size: int
    total_pages: int


class ListPostsUseCase(BaseUseCase):
    """Use case for listing posts with search, sorting and pagination."""

    def __init__(
        self,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        listing_cache: ListingCache,
        settings: ListingSettings,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_repository: Post repository
            vote_repository: Vote repository
            listing_cache: Cache for whole listing pages
            settings: Listing settings
        """
        self.post_repository = post_repository
        self.vote_repository = vote_repository
        self.listing_cache = listing_cache
        self.settings = settings

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Steps:
        1. Normalize paging, sort and search, derive the cache key
        2. Return the cached page on a hit
        3. Otherwise read one page and the filtered total from the store
        4. Attach the user's vote on each post (lookups run concurrently)
        5. Cache, unless a vote lookup failed, and return

        Args:
            request: List posts request

        Returns:
            The requested page with totals
        """
        page = request.page if request.page and request.page > 0 else 1
        page_size = (
            request.page_size
            if request.page_size and request.page_size > 0
            else self.settings.default_page_size
        )
        sort = request.sort or PostSortOrder.NEW
        post_filter = build_post_filter(request.search)
        search = getattr(post_filter, "term", "")

        key = self.listing_cache.key_for(
            page=page,
            page_size=page_size,
            sort=sort.value,
            search=search,
            user_id=request.user_id,
        )

        with logfire.span(
            "list_posts.execute",
            page=page,
            page_size=page_size,
            sort=sort.value,
            search=search or None,
        ):
            cached = self.listing_cache.get(key, ListPostsResponse)
            if cached is not None:
                logfire.info("Listing cache hit", key=key)
                return cached

            result = await self.post_repository.find_page(
                post_filter,
                sort,
                limit=page_size,
                offset=min((page - 1) * page_size, MAX_OFFSET),
                now=datetime.now(timezone.utc),
            )

            votes, complete = await self._lookup_votes(request.user_id, result.posts)

            response = ListPostsResponse(
                posts=[
                    self._to_item(post, vote) for post, vote in zip(result.posts, votes)
                ],
                total=result.total,
                page=page,
                page_size=page_size,
                total_pages=math.ceil(result.total / page_size),
            )

            if complete:
                self.listing_cache.put(key, response)
            else:
                logfire.info("Listing not cached, some vote lookups failed", key=key)
            logfire.info("Posts listed", count=len(response.posts), total=result.total)
            return response

    async def _lookup_votes(
        self, user_id: str | None, posts: list[Post]
    ) -> tuple[list[VoteDirection], bool]:
        """Vote directions for a page, and whether every lookup succeeded."""
        if not user_id or not posts:
            return [VoteDirection.NONE] * len(posts), True

        voter = UserId(UUID(user_id))
        results = await asyncio.gather(
            *(self._lookup_vote(voter, post) for post in posts)
        )
        directions = [
            direction if direction is not None else VoteDirection.NONE
            for direction in results
        ]
        return directions, all(direction is not None for direction in results)

    async def _lookup_vote(
        self, user_id: UserId, post: Post
    ) -> Optional[VoteDirection]:
        """One post's vote direction, or None when the lookup failed."""
        try:
            return await asyncio.wait_for(
                self.vote_repository.get_direction(
                    user_id, VotableType.POST, post.id
                ),
                timeout=self.settings.vote_lookup_timeout_seconds,
            )
        except Exception as e:
            vote_lookup_failures.add(1)
            logfire.warn(
                "Vote lookup failed, reporting no vote",
                post_id=str(post.id),
                error=str(e) or type(e).__name__,
            )
            return None

    @staticmethod
    def _to_item(post: Post, vote: VoteDirection) -> PostListItem:
        return PostListItem(
            post_id=str(post.id),
            title=post.title,
            kind=post.kind,
            url=post.url,
            text=post.text,
            author_id=str(post.author_id),
            author_username=post.author_username.root,
            points=post.points,
            comment_count=post.comment_count,
            created_at=post.created_at,
            user_vote=vote,
        )
