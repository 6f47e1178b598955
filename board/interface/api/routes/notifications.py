"""Notification routes. Every route acts on the caller's own notifications."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from board.application.usecase.notification import (
    GetUnreadCountUseCase,
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllNotificationsReadRequest,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
    MarkNotificationsReadResponse,
    UnreadCountRequest,
    UnreadCountResponse,
)
from board.domain.error import DomainError
from board.domain.service import JWTService
from board.interface.api.identity import require_identity
from board.interface.error import to_http_exception

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    unread_only: bool = False,
    limit: int = Query(default=50, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ListNotificationsResponse:
    """List the caller's notifications, newest first.

    Args:
        unread_only: Leave out notifications already marked as read
        limit: Maximum number of notifications
    """
    identity = require_identity(jwt_service, auth_token, "read notifications")

    return await list_notifications_use_case.execute(
        ListNotificationsRequest(
            user_id=identity.user_id, unread_only=unread_only, limit=limit
        )
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    unread_count_use_case: FromDishka[GetUnreadCountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UnreadCountResponse:
    """Number of unread notifications, for the badge."""
    identity = require_identity(jwt_service, auth_token, "read notifications")

    return await unread_count_use_case.execute(
        UnreadCountRequest(user_id=identity.user_id)
    )


@router.put("/read-all", response_model=MarkNotificationsReadResponse)
async def mark_all_read(
    mark_all_use_case: FromDishka[MarkAllNotificationsReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkNotificationsReadResponse:
    """Mark every unread notification as read."""
    identity = require_identity(jwt_service, auth_token, "update notifications")

    return await mark_all_use_case.execute(
        MarkAllNotificationsReadRequest(user_id=identity.user_id)
    )


@router.put("/{notification_id}/read", response_model=MarkNotificationsReadResponse)
async def mark_read(
    notification_id: UUID,
    mark_read_use_case: FromDishka[MarkNotificationReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkNotificationsReadResponse:
    """Mark one notification as read.

    Raises:
        HTTPException: 404 when the notification isn't the caller's
    """
    identity = require_identity(jwt_service, auth_token, "update notifications")

    try:
        return await mark_read_use_case.execute(
            MarkNotificationReadRequest(
                notification_id=str(notification_id), user_id=identity.user_id
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e, "mark notification read")
