"""Domain model entities for the board."""

from board.domain.model.comment import Comment
from board.domain.model.notification import Notification
from board.domain.model.post import Post
from board.domain.model.vote import Vote

__all__ = [
    "Post",
    "Comment",
    "Notification",
    "Vote",
]
