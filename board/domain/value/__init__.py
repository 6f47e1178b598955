"""Domain value objects for the board."""

from board.domain.value.identifiers import (
    CommentId,
    NotificationId,
    PostId,
    UserId,
    VoteId,
)
from board.domain.value.types import (
    CommentState,
    NotificationType,
    PostKind,
    Username,
    VotableType,
    VoteDirection,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    "NotificationId",
    # Types
    "CommentState",
    "NotificationType",
    "PostKind",
    "Username",
    "VotableType",
    "VoteDirection",
]
