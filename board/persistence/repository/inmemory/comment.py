"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from board.domain.model.comment import Comment
from board.domain.repository.comment import (
    AuthoredComment,
    AuthoredCommentPage,
    CommentRepository,
)
from board.domain.repository.post import PostRepository
from board.domain.value import CommentId, CommentState, PostId, Username


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Args:
        post_repository: Where find_by_author reads post titles from. Comments
            whose post it can't find are left out, as a join would.
    """

    def __init__(self, post_repository: PostRepository | None = None) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self.post_repository = post_repository

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post, oldest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: (c.created_at, c.id.int))
        return comments

    async def find_by_author(
        self, author_username: Username, limit: int, offset: int
    ) -> AuthoredCommentPage:
        items = []
        for comment in self._comments.values():
            if comment.author_username != author_username or comment.is_deleted:
                continue
            post = (
                await self.post_repository.find_by_id(comment.post_id)
                if self.post_repository
                else None
            )
            if post is not None:
                items.append(AuthoredComment(comment=comment, post_title=post.title))
        items.sort(key=lambda i: (i.comment.created_at, i.comment.id.int), reverse=True)
        return AuthoredCommentPage(
            items=items[offset : offset + limit], total=len(items)
        )

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def has_replies(self, comment_id: CommentId) -> bool:
        return any(c.parent_id == comment_id for c in self._comments.values())

    async def delete(self, comment_id: CommentId) -> None:
        self._comments.pop(comment_id, None)

    async def mark_deleted(self, comment_id: CommentId) -> Optional[Comment]:
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(update={"state": CommentState.DELETED})
        self._comments[comment_id] = updated
        return updated

    async def update_text(
        self, comment_id: CommentId, text: str, edited_at: datetime
    ) -> Optional[Comment]:
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            return None
        updated = comment.model_copy(update={"text": text, "edited_at": edited_at})
        self._comments[comment_id] = updated
        return updated

    async def increment_points(
        self, comment_id: CommentId, delta: int
    ) -> Optional[int]:
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(update={"points": comment.points + delta})
        self._comments[comment_id] = updated
        return updated.points
