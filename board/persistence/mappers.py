"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from board.domain.model import Comment, Notification, Post, Vote
from board.domain.value import (
    CommentId,
    CommentState,
    NotificationId,
    NotificationType,
    PostId,
    UserId,
    Username,
    VotableType,
    VoteDirection,
    VoteId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict (extra columns are ignored)

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        author_id=UserId(_uuid(row["author_id"])),
        author_username=Username(row["author_username"]),
        url=row.get("url"),
        text=row.get("text"),
        points=row["points"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return {
        "id": post.id,
        "title": post.title,
        "author_id": post.author_id,
        "author_username": post.author_username.root,
        "url": post.url,
        "text": post.text,
        "points": post.points,
        "comment_count": post.comment_count,
        "created_at": post.created_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_username=Username(row["author_username"]),
        text=row["text"],
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        points=row["points"],
        state=CommentState(row["state"]),
        created_at=row["created_at"],
        edited_at=row.get("edited_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "author_id": comment.author_id,
        "author_username": comment.author_username.root,
        "text": comment.text,
        "parent_id": comment.parent_id,
        "points": comment.points,
        "state": comment.state.value,
        "created_at": comment.created_at,
        "edited_at": comment.edited_at,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        direction=VoteDirection(row["direction"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "votable_type": vote.votable_type.value,
        "votable_id": vote.votable_id,
        "direction": int(vote.direction),
        "created_at": vote.created_at,
    }


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model.

    post_title and comment_text are read when the query joined them in.
    """
    comment_id = row.get("comment_id")
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        recipient_id=UserId(_uuid(row["recipient_id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        sender_username=Username(row["sender_username"]),
        type=NotificationType(row["type"]),
        post_id=PostId(_uuid(row["post_id"])),
        comment_id=CommentId(_uuid(comment_id)) if comment_id else None,
        is_read=row["is_read"],
        created_at=row["created_at"],
        post_title=row.get("post_title"),
        comment_text=row.get("comment_text"),
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "sender_id": notification.sender_id,
        "sender_username": notification.sender_username.root,
        "type": notification.type.value,
        "post_id": notification.post_id,
        "comment_id": notification.comment_id,
        "is_read": notification.is_read,
        "created_at": notification.created_at,
    }
