"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, asc, delete, desc, exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Comment
from board.domain.repository import (
    AuthoredComment,
    AuthoredCommentPage,
    CommentRepository,
)
from board.domain.value import CommentId, CommentState, PostId, Username
from board.persistence.mappers import comment_to_dict, row_to_comment
from board.persistence.tables import comments_table, posts_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(asc(comments_table.c.created_at), asc(comments_table.c.id))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_author(
        self, author_username: Username, limit: int, offset: int
    ) -> AuthoredCommentPage:
        condition = and_(
            comments_table.c.author_username == author_username.root,
            comments_table.c.state == CommentState.ACTIVE.value,
        )
        stmt = (
            select(
                comments_table,
                posts_table.c.title.label("post_title"),
                func.count().over().label("total_count"),
            )
            .select_from(
                comments_table.join(
                    posts_table, posts_table.c.id == comments_table.c.post_id
                )
            )
            .where(condition)
            .order_by(desc(comments_table.c.created_at), desc(comments_table.c.id))
            .limit(limit)
            .offset(offset)
        )
        rows = (await self.session.execute(stmt)).fetchall()

        if rows:
            total = rows[0].total_count
        else:
            count_stmt = select(func.count()).select_from(comments_table).where(condition)
            total = (await self.session.execute(count_stmt)).scalar() or 0

        items = [
            AuthoredComment(
                comment=row_to_comment(row._asdict()), post_title=row.post_title
            )
            for row in rows
        ]
        return AuthoredCommentPage(items=items, total=total)

    async def save(self, comment: Comment) -> Comment:
        existing = await self.find_by_id(comment.id)
        comment_dict = comment_to_dict(comment)

        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def has_replies(self, comment_id: CommentId) -> bool:
        stmt = select(exists().where(comments_table.c.parent_id == comment_id))
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def delete(self, comment_id: CommentId) -> None:
        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def mark_deleted(self, comment_id: CommentId) -> Optional[Comment]:
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(state=CommentState.DELETED.value)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None

    async def update_text(
        self, comment_id: CommentId, text: str, edited_at: datetime
    ) -> Optional[Comment]:
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.state == CommentState.ACTIVE.value)
            .values(text=text, edited_at=edited_at)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None

    async def increment_points(
        self, comment_id: CommentId, delta: int
    ) -> Optional[int]:
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(points=comments_table.c.points + delta)
            .returning(comments_table.c.points)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar_one_or_none()
