"""Notification entity.

A notification tells a user that someone commented on their post or replied
to their comment. It is written in the same transaction as the comment.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from board.domain.model.common import DomainModel
from board.domain.model.post import utc_now
from board.domain.value import (
    CommentId,
    NotificationId,
    NotificationType,
    PostId,
    UserId,
    Username,
)


class Notification(DomainModel):
    """Notification entity.

    post_title and comment_text are filled in when notifications are read
    back and are never stored. comment_text is None once the comment has
    been deleted.
    """

    id: NotificationId
    recipient_id: UserId
    sender_id: UserId
    sender_username: Username
    type: NotificationType
    post_id: PostId
    comment_id: Optional[CommentId] = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=utc_now)

    post_title: Optional[str] = None
    comment_text: Optional[str] = None
