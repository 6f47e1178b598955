"""Notification use cases."""

from .list_notifications import (
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    NotificationItem,
)
from .mark_read import (
    MarkAllNotificationsReadRequest,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
    MarkNotificationsReadResponse,
)
from .unread_count import (
    GetUnreadCountUseCase,
    UnreadCountRequest,
    UnreadCountResponse,
)

__all__ = [
    "GetUnreadCountUseCase",
    "ListNotificationsRequest",
    "ListNotificationsResponse",
    "ListNotificationsUseCase",
    "MarkAllNotificationsReadRequest",
    "MarkAllNotificationsReadUseCase",
    "MarkNotificationReadRequest",
    "MarkNotificationReadUseCase",
    "MarkNotificationsReadResponse",
    "NotificationItem",
    "UnreadCountRequest",
    "UnreadCountResponse",
]
