"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from board.domain.model.comment import Comment
from board.domain.value import CommentId, PostId, Username
from board.domain.value.common import ValueObject


class AuthoredComment(ValueObject):
    """A comment together with the title of the post it was written on."""

    comment: Comment
    post_title: str


class AuthoredCommentPage(ValueObject):
    """One page of a user's comments and how many they have in total."""

    items: list[AuthoredComment]
    total: int = Field(ge=0)


class CommentRepository(ABC):
    """Repository for Comment entity."""

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find every comment on a post, deleted ones included.

        Args:
            post_id: The post ID

        Returns:
            Comments ordered by created_at ascending (id breaks ties)
        """
        pass

    @abstractmethod
    async def find_by_author(
        self, author_username: Username, limit: int, offset: int
    ) -> AuthoredCommentPage:
        """Find one page of a user's comments, newest first.

        Deleted comments are left out of both the page and the total.
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        pass

    @abstractmethod
    async def has_replies(self, comment_id: CommentId) -> bool:
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Physically remove a comment. Only valid for comments without replies."""
        pass

    @abstractmethod
    async def mark_deleted(self, comment_id: CommentId) -> Optional[Comment]:
        """Move a comment to the deleted state, keeping its place in the thread.

        Returns:
            Updated comment, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def update_text(
        self, comment_id: CommentId, text: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace a comment's text and record when it was edited.

        Returns:
            Updated comment, or None if it doesn't exist or is deleted
        """
        pass

    @abstractmethod
    async def increment_points(
        self, comment_id: CommentId, delta: int
    ) -> Optional[int]:
        """Atomically add delta (may be negative) to a comment's points.

        Returns:
            The new point total, or None if the comment doesn't exist
        """
        pass
