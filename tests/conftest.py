"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import logfire

from board.config import AuthSettings
from board.domain.model.comment import Comment
from board.domain.model.post import Post
from board.domain.value import CommentId, CommentState, PostId, UserId, Username
from board.util.jwt import create_token

# Spans and logs stay in-process during tests
logfire.configure(send_to_logfire=False, console=False)


def hours_ago(hours: float, now: datetime | None = None) -> datetime:
    """Timestamp `hours` before now (UTC)."""
    return (now or datetime.now(timezone.utc)) - timedelta(hours=hours)


def make_post(
    title: str = "Test Post",
    *,
    points: int = 0,
    created_at: datetime | None = None,
    url: str | None = None,
    text: str | None = None,
    author_id: UUID | None = None,
    author_username: str = "author",
    comment_count: int = 0,
    post_id: UUID | None = None,
) -> Post:
    """Build a valid post. Defaults to a text post created just now."""
    if url is None and text is None:
        text = "Test content"
    return Post(
        id=PostId(post_id or uuid4()),
        title=title,
        author_id=UserId(author_id or uuid4()),
        author_username=Username(author_username),
        url=url,
        text=text,
        points=points,
        comment_count=comment_count,
        created_at=created_at or datetime.now(timezone.utc),
    )


def make_comment(
    post_id: UUID,
    *,
    parent_id: UUID | None = None,
    text: str = "Test comment",
    created_at: datetime | None = None,
    author_id: UUID | None = None,
    author_username: str = "commenter",
    state: CommentState = CommentState.ACTIVE,
    comment_id: UUID | None = None,
) -> Comment:
    """Build a valid comment on a post."""
    return Comment(
        id=CommentId(comment_id or uuid4()),
        post_id=PostId(post_id),
        parent_id=CommentId(parent_id) if parent_id else None,
        author_id=UserId(author_id or uuid4()),
        author_username=Username(author_username),
        text=text,
        state=state,
        created_at=created_at or datetime.now(timezone.utc),
    )


def make_token(user_id: UUID, username: str = "alice") -> str:
    """Session token signed with the default (test) auth settings."""
    return create_token(str(user_id), username, AuthSettings())
