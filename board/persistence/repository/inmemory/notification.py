"""In-memory notification repository for testing."""

from board.domain.model.notification import Notification
from board.domain.repository.comment import CommentRepository
from board.domain.repository.notification import NotificationRepository
from board.domain.repository.post import PostRepository
from board.domain.value import NotificationId, UserId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing.

    Post titles and comment text are looked up in the given repositories on
    read, the way the SQL implementation joins them in.
    """

    def __init__(
        self, post_repository: PostRepository, comment_repository: CommentRepository
    ) -> None:
        self._notifications: dict[NotificationId, Notification] = {}
        self.post_repository = post_repository
        self.comment_repository = comment_repository

    async def save(self, notification: Notification) -> Notification:
        self._notifications[notification.id] = notification
        return notification

    async def find_for_recipient(
        self, recipient_id: UserId, unread_only: bool, limit: int
    ) -> list[Notification]:
        matching = [
            n
            for n in self._notifications.values()
            if n.recipient_id == recipient_id and not (unread_only and n.is_read)
        ]
        matching.sort(key=lambda n: (n.created_at, n.id.int), reverse=True)

        populated = []
        for notification in matching:
            if len(populated) == limit:
                break
            post = await self.post_repository.find_by_id(notification.post_id)
            if post is None:
                # Removed along with its post
                continue
            comment = (
                await self.comment_repository.find_by_id(notification.comment_id)
                if notification.comment_id
                else None
            )
            populated.append(
                notification.model_copy(
                    update={
                        "post_title": post.title,
                        "comment_text": (
                            comment.text
                            if comment is not None and not comment.is_deleted
                            else None
                        ),
                    }
                )
            )
        return populated

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> bool:
        notification = self._notifications.get(notification_id)
        if notification is None or notification.recipient_id != recipient_id:
            return False
        self._notifications[notification_id] = notification.model_copy(
            update={"is_read": True}
        )
        return True

    async def mark_all_read(self, recipient_id: UserId) -> int:
        changed = 0
        for notification in list(self._notifications.values()):
            if notification.recipient_id == recipient_id and not notification.is_read:
                self._notifications[notification.id] = notification.model_copy(
                    update={"is_read": True}
                )
                changed += 1
        return changed

    async def count_unread(self, recipient_id: UserId) -> int:
        return sum(
            1
            for n in self._notifications.values()
            if n.recipient_id == recipient_id and not n.is_read
        )
