"""Create post use case."""

from datetime import datetime, timezone
from functools import partial
from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel

from board.application.cache import ListingCache
from board.application.usecase.base import BaseUseCase
from board.domain.model.post import Post
from board.domain.service import PostService
from board.domain.transaction import CommitHooks
from board.domain.value import PostId, PostKind, UserId, Username


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str
    author_id: str  # User ID from authenticated user
    author_username: str
    url: str | None = None
    text: str | None = None


class CreatePostResponse(BaseModel):
    """Create post response."""

    post_id: str
    title: str
    kind: PostKind
    points: int
    created_at: datetime


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a new post."""

    def __init__(
        self,
        post_service: PostService,
        listing_cache: ListingCache,
        commit_hooks: CommitHooks,
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            listing_cache: Listing cache to refresh once the post exists
            commit_hooks: Defers the refresh until the post is committed
        """
        self.post_service = post_service
        self.listing_cache = listing_cache
        self.commit_hooks = commit_hooks

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Steps:
        1. Build the Post entity (validation happens in domain model)
        2. Save post (via PostService)
        3. Once committed, invalidate cached listings so the post shows up

        Raises:
            ValueError: If the post fails validation
        """
        with logfire.span(
            "create_post.execute", title=request.title, author_id=request.author_id
        ):
            post = Post(
                id=PostId(uuid4()),
                title=request.title.strip(),
                author_id=UserId(UUID(request.author_id)),
                author_username=Username(request.author_username),
                url=request.url or None,
                text=request.text or None,
                created_at=datetime.now(timezone.utc),
            )

            saved_post = await self.post_service.save_post(post)
            self.commit_hooks.after_commit(
                partial(self.listing_cache.on_post_created, saved_post)
            )

            logfire.info("Post created successfully", post_id=str(saved_post.id))

            return CreatePostResponse(
                post_id=str(saved_post.id),
                title=saved_post.title,
                kind=saved_post.kind,
                points=saved_post.points,
                created_at=saved_post.created_at,
            )
