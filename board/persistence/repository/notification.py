"""PostgreSQL implementation of Notification repository."""

from typing import List

import logfire
from sqlalchemy import case, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Notification
from board.domain.repository import NotificationRepository
from board.domain.value import CommentState, NotificationId, UserId
from board.persistence.mappers import notification_to_dict, row_to_notification
from board.persistence.tables import comments_table, notifications_table, posts_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, notification: Notification) -> Notification:
        stmt = notifications_table.insert().values(**notification_to_dict(notification))
        await self.session.execute(stmt)
        await self.session.flush()
        return notification

    async def find_for_recipient(
        self, recipient_id: UserId, unread_only: bool, limit: int
    ) -> List[Notification]:
        """Read notifications with the post title and comment text joined in."""
        with logfire.span(
            "notification_repository.find_for_recipient",
            recipient_id=str(recipient_id),
            unread_only=unread_only,
        ):
            comment_text = case(
                (comments_table.c.state == CommentState.DELETED.value, None),
                else_=comments_table.c.text,
            )
            stmt = (
                select(
                    notifications_table,
                    posts_table.c.title.label("post_title"),
                    comment_text.label("comment_text"),
                )
                .select_from(
                    notifications_table.join(
                        posts_table, posts_table.c.id == notifications_table.c.post_id
                    ).outerjoin(
                        comments_table,
                        comments_table.c.id == notifications_table.c.comment_id,
                    )
                )
                .where(notifications_table.c.recipient_id == recipient_id)
                .order_by(
                    desc(notifications_table.c.created_at),
                    desc(notifications_table.c.id),
                )
                .limit(limit)
            )
            if unread_only:
                stmt = stmt.where(notifications_table.c.is_read.is_(False))

            result = await self.session.execute(stmt)
            return [row_to_notification(row._asdict()) for row in result.fetchall()]

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> bool:
        stmt = (
            update(notifications_table)
            .where(notifications_table.c.id == notification_id)
            .where(notifications_table.c.recipient_id == recipient_id)
            .values(is_read=True)
            .returning(notifications_table.c.id)
        )
        result = await self.session.execute(stmt)
        found = result.scalar_one_or_none() is not None
        await self.session.flush()
        return found

    async def mark_all_read(self, recipient_id: UserId) -> int:
        stmt = (
            update(notifications_table)
            .where(notifications_table.c.recipient_id == recipient_id)
            .where(notifications_table.c.is_read.is_(False))
            .values(is_read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def count_unread(self, recipient_id: UserId) -> int:
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(notifications_table.c.recipient_id == recipient_id)
            .where(notifications_table.c.is_read.is_(False))
        )
        return (await self.session.execute(stmt)).scalar() or 0
