"""Create comment use case."""

from datetime import datetime
from functools import partial
from uuid import UUID

import logfire
from pydantic import BaseModel

from board.application.cache import ListingCache
from board.application.usecase.base import BaseUseCase
from board.domain.error import ValidationError
from board.domain.service import CommentService, NotificationService, PostService
from board.domain.transaction import CommitHooks
from board.domain.value import CommentId, PostId, UserId, Username


class CreateCommentRequest(BaseModel):
    """Create comment request.

    For a reply, parent_id is set; post_id may then be omitted and is taken
    from the parent comment.
    """

    post_id: str | None = None
    parent_id: str | None = None
    author_id: str
    author_username: str
    text: str


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    post_id: str
    parent_id: str | None
    text: str
    points: int
    created_at: datetime


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a post or replying to a comment."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        notification_service: NotificationService,
        listing_cache: ListingCache,
        commit_hooks: CommitHooks,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            notification_service: Tells the post or parent author about the comment
            listing_cache: Listing cache (comment counts appear in listings)
            commit_hooks: Defers cache invalidation until the comment is committed
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.notification_service = notification_service
        self.listing_cache = listing_cache
        self.commit_hooks = commit_hooks

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Raises:
            ValidationError: If neither post_id nor parent_id is given
            NotFoundError: If the post or parent comment doesn't exist
            ContentDeletedException: If replying to a deleted comment
        """
        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None
        parent = (
            await self.comment_service.require_comment(parent_id) if parent_id else None
        )

        if request.post_id:
            post_id = PostId(UUID(request.post_id))
        elif parent is not None:
            post_id = parent.post_id
        else:
            raise ValidationError("A comment needs a post or a parent comment")

        with logfire.span(
            "create_comment.execute",
            post_id=str(post_id),
            parent_id=request.parent_id,
            author_id=request.author_id,
        ):
            post = await self.post_service.require_post(post_id)

            comment = await self.comment_service.create_comment(
                post_id=post_id,
                author_id=UserId(UUID(request.author_id)),
                author_username=Username(request.author_username),
                text=request.text,
                parent_id=parent_id,
            )

            await self.post_service.change_comment_count(post_id, 1)
            await self.notification_service.notify_comment_created(
                comment, post, parent
            )
            self.commit_hooks.after_commit(
                partial(self.listing_cache.on_post_changed, post_id)
            )

            return CreateCommentResponse(
                comment_id=str(comment.id),
                post_id=str(comment.post_id),
                parent_id=str(comment.parent_id) if comment.parent_id else None,
                text=comment.text,
                points=comment.points,
                created_at=comment.created_at,
            )
