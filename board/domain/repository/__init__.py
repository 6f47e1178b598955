"""Repository interfaces for the board domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from board.domain.repository.comment import (
    AuthoredComment,
    AuthoredCommentPage,
    CommentRepository,
)
from board.domain.repository.notification import NotificationRepository
from board.domain.repository.post import (
    MatchAll,
    PostFilter,
    PostPage,
    PostRepository,
    PostSortOrder,
    TitleContains,
    build_post_filter,
)
from board.domain.repository.vote import VoteRepository

__all__ = [
    "AuthoredComment",
    "AuthoredCommentPage",
    "CommentRepository",
    "MatchAll",
    "NotificationRepository",
    "PostFilter",
    "PostPage",
    "PostRepository",
    "PostSortOrder",
    "TitleContains",
    "VoteRepository",
    "build_post_filter",
]
