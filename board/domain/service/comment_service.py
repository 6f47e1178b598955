"""Comment domain service."""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

import logfire

from board.domain.error import (
    ContentDeletedException,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from board.domain.model.comment import Comment
from board.domain.repository import CommentRepository
from board.domain.value import CommentId, PostId, UserId, Username

from .base import Service


class DeletionOutcome(str, Enum):
    """How a comment deletion was carried out."""

    SOFT = "soft"  # kept as a placeholder, it has replies
    HARD = "hard"  # physically removed


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        author_username: Username,
        text: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            author_username: Author display name
            text: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the parent comment doesn't exist
            ValidationError: If the parent belongs to another post
            ContentDeletedException: If the parent was deleted
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")
                if parent.is_deleted:
                    raise ContentDeletedException("comment", str(parent_id))

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                author_username=author_username,
                text=text,
                parent_id=parent_id,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return saved

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get every comment of a post, oldest first.

        Args:
            post_id: Post ID

        Returns:
            Flat list of comments, deleted placeholders included
        """
        with logfire.span(
            "comment_service.get_comments_for_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.find_by_post(post_id)
            logfire.info(
                "Comments retrieved for post", post_id=str(post_id), count=len(comments)
            )
            return comments

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def require_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID or fail.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        comment = await self.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def edit_comment(
        self, comment_id: CommentId, user_id: UserId, text: str
    ) -> Comment:
        """Replace the text of a comment and stamp edited_at.

        Args:
            comment_id: Comment ID
            user_id: User requesting the edit
            text: New text

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user isn't the author
            ContentDeletedException: If the comment was deleted
        """
        with logfire.span(
            "comment_service.edit_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
            text_length=len(text),
        ):
            comment = await self.require_comment(comment_id)
            self._ensure_author(comment, user_id)
            if comment.is_deleted:
                raise ContentDeletedException("comment", str(comment_id))

            # Runs the model's length rules before touching the store
            Comment.model_validate({**comment.model_dump(), "text": text})

            updated = await self.comment_repository.update_text(
                comment_id, text, edited_at=datetime.now(timezone.utc)
            )
            if updated is None:
                # Deleted or removed between the read and the write
                raise ContentDeletedException("comment", str(comment_id))

            logfire.info("Comment edited", comment_id=str(comment_id))
            return updated

    async def delete_comment(
        self, comment_id: CommentId, user_id: UserId
    ) -> tuple[Comment, DeletionOutcome]:
        """Delete a comment.

        A comment with replies becomes a deleted placeholder so the thread
        under it stays intact; a leaf comment is removed outright.

        Returns:
            The comment as it was before deletion and how it was deleted

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user isn't the author
            ContentDeletedException: If the comment was already deleted
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            comment = await self.require_comment(comment_id)
            self._ensure_author(comment, user_id)
            if comment.is_deleted:
                raise ContentDeletedException("comment", str(comment_id))

            if await self.comment_repository.has_replies(comment_id):
                await self.comment_repository.mark_deleted(comment_id)
                outcome = DeletionOutcome.SOFT
            else:
                await self.comment_repository.delete(comment_id)
                outcome = DeletionOutcome.HARD

            logfire.info(
                "Comment deleted", comment_id=str(comment_id), outcome=outcome.value
            )
            return comment, outcome

    async def change_points(self, comment_id: CommentId, delta: int) -> int:
        """Atomically adjust a comment's points.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "comment_service.change_points", comment_id=str(comment_id), delta=delta
        ):
            points = await self.comment_repository.increment_points(comment_id, delta)
            if points is None:
                raise NotFoundError("Comment", str(comment_id))
            return points

    @staticmethod
    def _ensure_author(comment: Comment, user_id: UserId) -> None:
        if comment.author_id != user_id:
            logfire.warn(
                "User is not the comment author",
                comment_id=str(comment.id),
                user_id=str(user_id),
            )
            raise NotAuthorizedError("comment", str(comment.id), str(user_id))
