"""Update comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase
from board.domain.service import CommentService
from board.domain.value import CommentId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str
    user_id: str
    text: str


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment_id: str
    text: str
    edited_at: datetime | None


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment's text. Only the author may edit."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user isn't the author
            ContentDeletedException: If the comment was deleted
        """
        comment = await self.comment_service.edit_comment(
            CommentId(UUID(request.comment_id)),
            UserId(UUID(request.user_id)),
            request.text,
        )
        return UpdateCommentResponse(
            comment_id=str(comment.id),
            text=comment.text,
            edited_at=comment.edited_at,
        )
