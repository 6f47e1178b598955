"""Comment entity.

Comments are stored flat, each pointing at its parent (None for top-level).
The nested thread is rebuilt per request by the comment tree builder.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from board.domain.model.common import DomainModel
from board.domain.model.post import utc_now
from board.domain.value import CommentId, CommentState, PostId, UserId, Username


class Comment(DomainModel):
    """Comment entity.

    A comment with replies is never physically removed; deleting it moves it
    to CommentState.DELETED so the thread below it stays attached.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_username: Username
    text: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    points: int = 0
    state: CommentState = CommentState.ACTIVE
    created_at: datetime = Field(default_factory=utc_now)
    edited_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.state == CommentState.DELETED
