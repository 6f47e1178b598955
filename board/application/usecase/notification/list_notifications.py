"""List notifications use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from board.application.usecase.base import BaseUseCase
from board.domain.model.notification import Notification
from board.domain.service import NotificationService
from board.domain.value import NotificationType, UserId


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: str
    unread_only: bool = False
    limit: int = Field(default=50, ge=1, le=100)


class NotificationItem(BaseModel):
    """Notification in response."""

    notification_id: str
    type: NotificationType
    sender_id: str
    sender_username: str
    post_id: str
    post_title: str | None
    comment_id: str | None
    comment_text: str | None
    is_read: bool
    created_at: datetime


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: list[NotificationItem]


class ListNotificationsUseCase(BaseUseCase):
    """Use case for reading the caller's notifications, newest first."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        with logfire.span("list_notifications.execute", user_id=request.user_id):
            notifications = await self.notification_service.get_notifications(
                UserId(UUID(request.user_id)),
                unread_only=request.unread_only,
                limit=request.limit,
            )
            return ListNotificationsResponse(
                notifications=[self._to_item(n) for n in notifications]
            )

    @staticmethod
    def _to_item(notification: Notification) -> NotificationItem:
        return NotificationItem(
            notification_id=str(notification.id),
            type=notification.type,
            sender_id=str(notification.sender_id),
            sender_username=notification.sender_username.root,
            post_id=str(notification.post_id),
            post_title=notification.post_title,
            comment_id=(
                str(notification.comment_id) if notification.comment_id else None
            ),
            comment_text=notification.comment_text,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )
