"""Notification domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from board.domain.error import NotFoundError
from board.domain.model.comment import Comment
from board.domain.model.notification import Notification
from board.domain.model.post import Post
from board.domain.repository import NotificationRepository
from board.domain.value import NotificationId, NotificationType, UserId

from .base import Service


class NotificationService(Service):
    """Domain service for comment and reply notifications."""

    def __init__(self, notification_repository: NotificationRepository) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
        """
        self.notification_repository = notification_repository

    async def notify_comment_created(
        self, comment: Comment, post: Post, parent: Optional[Comment] = None
    ) -> Optional[Notification]:
        """Tell the author of the post, or of the parent for a reply.

        Nobody is notified about their own content.

        Args:
            comment: The new comment
            post: The post it was written on
            parent: The comment being replied to, if any

        Returns:
            The notification, or None when the commenter is the recipient
        """
        if parent is not None:
            recipient_id = parent.author_id
            kind = NotificationType.COMMENT_REPLY
        else:
            recipient_id = post.author_id
            kind = NotificationType.POST_COMMENT

        if recipient_id == comment.author_id:
            return None

        notification = Notification(
            id=NotificationId(uuid4()),
            recipient_id=recipient_id,
            sender_id=comment.author_id,
            sender_username=comment.author_username,
            type=kind,
            post_id=post.id,
            comment_id=comment.id,
        )
        saved = await self.notification_repository.save(notification)
        logfire.info(
            "Notification created",
            notification_id=str(saved.id),
            recipient_id=str(recipient_id),
            type=kind.value,
        )
        return saved

    async def get_notifications(
        self, user_id: UserId, unread_only: bool = False, limit: int = 50
    ) -> list[Notification]:
        with logfire.span(
            "notification_service.get_notifications",
            user_id=str(user_id),
            unread_only=unread_only,
        ):
            return await self.notification_repository.find_for_recipient(
                user_id, unread_only=unread_only, limit=limit
            )

    async def mark_read(self, notification_id: NotificationId, user_id: UserId) -> None:
        """Mark one of the user's notifications as read.

        Raises:
            NotFoundError: If the notification doesn't exist or isn't theirs
        """
        if not await self.notification_repository.mark_read(notification_id, user_id):
            logfire.warn(
                "Notification not found for user",
                notification_id=str(notification_id),
                user_id=str(user_id),
            )
            raise NotFoundError("Notification", str(notification_id))

    async def mark_all_read(self, user_id: UserId) -> int:
        changed = await self.notification_repository.mark_all_read(user_id)
        logfire.info("Notifications marked read", user_id=str(user_id), count=changed)
        return changed

    async def unread_count(self, user_id: UserId) -> int:
        return await self.notification_repository.count_unread(user_id)
