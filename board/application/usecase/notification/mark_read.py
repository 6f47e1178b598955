"""Mark notifications read use cases."""

from uuid import UUID

from pydantic import BaseModel

from board.application.usecase.base import BaseUseCase
from board.domain.service import NotificationService
from board.domain.value import NotificationId, UserId


class MarkNotificationReadRequest(BaseModel):
    """Mark one notification read request."""

    notification_id: str
    user_id: str


class MarkAllNotificationsReadRequest(BaseModel):
    """Mark every notification read request."""

    user_id: str


class MarkNotificationsReadResponse(BaseModel):
    """Mark read response."""

    marked: int
    unread_count: int


class MarkNotificationReadUseCase(BaseUseCase):
    """Use case for marking one of the caller's notifications as read."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: MarkNotificationReadRequest
    ) -> MarkNotificationsReadResponse:
        """Mark the notification read.

        Marking an already read notification again succeeds.

        Raises:
            NotFoundError: If the notification doesn't exist or isn't the caller's
        """
        user_id = UserId(UUID(request.user_id))
        await self.notification_service.mark_read(
            NotificationId(UUID(request.notification_id)), user_id
        )
        return MarkNotificationsReadResponse(
            marked=1,
            unread_count=await self.notification_service.unread_count(user_id),
        )


class MarkAllNotificationsReadUseCase(BaseUseCase):
    """Use case for clearing every unread notification of the caller."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: MarkAllNotificationsReadRequest
    ) -> MarkNotificationsReadResponse:
        user_id = UserId(UUID(request.user_id))
        marked = await self.notification_service.mark_all_read(user_id)
        return MarkNotificationsReadResponse(marked=marked, unread_count=0)
