"""Delete comment use case."""

from functools import partial
from uuid import UUID

import logfire
from pydantic import BaseModel

from board.application.cache import ListingCache
from board.application.usecase.base import BaseUseCase
from board.domain.service import CommentService, DeletionOutcome, PostService
from board.domain.transaction import CommitHooks
from board.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    user_id: str


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    outcome: DeletionOutcome


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment.

    Comments with replies stay in the thread as "[deleted]" placeholders;
    leaf comments are removed and no longer count towards the post.
    """

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        listing_cache: ListingCache,
        commit_hooks: CommitHooks,
    ) -> None:
        self.comment_service = comment_service
        self.post_service = post_service
        self.listing_cache = listing_cache
        self.commit_hooks = commit_hooks

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user isn't the author
            ContentDeletedException: If the comment was already deleted
        """
        with logfire.span("delete_comment.execute", comment_id=request.comment_id):
            comment, outcome = await self.comment_service.delete_comment(
                CommentId(UUID(request.comment_id)), UserId(UUID(request.user_id))
            )

            if outcome == DeletionOutcome.HARD:
                await self.post_service.change_comment_count(comment.post_id, -1)
                self.commit_hooks.after_commit(
                    partial(self.listing_cache.on_post_changed, comment.post_id)
                )

            return DeleteCommentResponse(comment_id=str(comment.id), outcome=outcome)
