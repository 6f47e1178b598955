"""PostgreSQL repository implementations."""

from board.persistence.repository.comment import PostgresCommentRepository
from board.persistence.repository.notification import PostgresNotificationRepository
from board.persistence.repository.post import PostgresPostRepository
from board.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresNotificationRepository",
    "PostgresVoteRepository",
]
