"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import List

from board.domain.model.notification import Notification
from board.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def find_for_recipient(
        self, recipient_id: UserId, unread_only: bool, limit: int
    ) -> List[Notification]:
        """Find a user's notifications, newest first.

        Args:
            recipient_id: The recipient's user ID
            unread_only: Skip notifications already marked as read
            limit: Maximum number of notifications to return

        Returns:
            Notifications with post_title and comment_text filled in
        """
        pass

    @abstractmethod
    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> bool:
        """Mark one notification as read.

        Returns:
            False if no such notification belongs to the recipient
        """
        pass

    @abstractmethod
    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark every unread notification of a user as read.

        Returns:
            How many notifications changed
        """
        pass

    @abstractmethod
    async def count_unread(self, recipient_id: UserId) -> int:
        pass
