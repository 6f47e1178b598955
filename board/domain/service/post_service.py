"""Post domain service."""

import logfire

from board.domain.error import NotFoundError
from board.domain.model.post import Post
from board.domain.repository import PostRepository
from board.domain.value import PostId

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def save_post(self, post: Post) -> Post:
        """Save a post.

        Args:
            post: Post to save

        Returns:
            Saved post
        """
        with logfire.span(
            "post_service.save_post", post_id=str(post.id), title=post.title
        ):
            saved = await self.post_repository.save(post)
            logfire.info("Post saved", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id))
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def require_post(self, post_id: PostId) -> Post:
        """Get a post by ID or fail.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post = await self.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))
        return post

    async def change_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically adjust a post's comment count.

        Args:
            post_id: Post ID
            delta: +1 for a new comment, -1 for a removed one
        """
        with logfire.span(
            "post_service.change_comment_count", post_id=str(post_id), delta=delta
        ):
            await self.post_repository.increment_comment_count(post_id, delta)
            logfire.info("Comment count changed", post_id=str(post_id), delta=delta)

    async def change_points(self, post_id: PostId, delta: int) -> int:
        """Atomically adjust a post's points.

        Args:
            post_id: Post ID
            delta: Signed change

        Returns:
            New point total

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span(
            "post_service.change_points", post_id=str(post_id), delta=delta
        ):
            points = await self.post_repository.increment_points(post_id, delta)
            if points is None:
                raise NotFoundError("Post", str(post_id))
            logfire.info("Post points changed", post_id=str(post_id), points=points)
            return points
