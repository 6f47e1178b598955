"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import Float, cast, desc, func, literal, select, update
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.ext.asyncio import AsyncSession

from board.config import RankingSettings
from board.domain.model import Post
from board.domain.repository.post import (
    MatchAll,
    PostFilter,
    PostPage,
    PostRepository,
    PostSortOrder,
    TitleContains,
)
from board.domain.value import PostId, Username
from board.persistence.mappers import post_to_dict, row_to_post
from board.persistence.tables import posts_table

LIKE_ESCAPE = "\\"


def escape_like(term: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(
        self, session: AsyncSession, ranking: RankingSettings | None = None
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            ranking: Ranking settings for the "best" order
        """
        self.session = session
        self.ranking = ranking or RankingSettings()

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                return None

            return row_to_post(row._asdict())

    def _where(self, post_filter: PostFilter):
        if isinstance(post_filter, TitleContains):
            pattern = f"%{escape_like(post_filter.term)}%"
            return posts_table.c.title.ilike(pattern, escape=LIKE_ESCAPE)
        if isinstance(post_filter, MatchAll):
            return None
        raise TypeError(f"Unsupported post filter: {post_filter!r}")

    def _order_by(self, sort: PostSortOrder, now: datetime) -> list:
        tie_breakers = [desc(posts_table.c.created_at), desc(posts_table.c.id)]

        if sort == PostSortOrder.TOP:
            return [desc(posts_table.c.points), *tie_breakers]

        if sort == PostSortOrder.BEST:
            # points / (age_hours + offset)^gravity, with one bound "now"
            reference = literal(now, type_=TIMESTAMP(timezone=True))
            age_hours = func.greatest(
                cast(func.extract("epoch", reference - posts_table.c.created_at), Float)
                / 3600.0,
                0.0,
            )
            score = cast(posts_table.c.points, Float) / func.power(
                age_hours + literal(self.ranking.time_offset, Float),
                literal(self.ranking.gravity, Float),
            )
            return [desc(score), *tie_breakers]

        return tie_breakers

    async def find_page(
        self,
        post_filter: PostFilter,
        sort: PostSortOrder,
        limit: int,
        offset: int,
        now: datetime,
    ) -> PostPage:
        """Find one page of posts and the filtered total in one statement."""
        with logfire.span(
            "post_repository.find_page",
            filter=type(post_filter).__name__,
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            condition = self._where(post_filter)

            # The window count is evaluated before LIMIT/OFFSET, so every row
            # carries the size of the whole filtered set
            stmt = select(posts_table, func.count().over().label("total_count"))
            if condition is not None:
                stmt = stmt.where(condition)
            stmt = stmt.order_by(*self._order_by(sort, now)).limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            rows = result.fetchall()

            if rows:
                total = rows[0].total_count
            else:
                # Past the last page there is no row to carry the count
                count_stmt = select(func.count()).select_from(posts_table)
                if condition is not None:
                    count_stmt = count_stmt.where(condition)
                total = (await self.session.execute(count_stmt)).scalar() or 0

            posts = [row_to_post(row._asdict()) for row in rows]
            logfire.info("Found posts", count=len(posts), total=total)
            return PostPage(posts=posts, total=total)

    async def find_by_author(
        self, author_username: Username, limit: int, offset: int
    ) -> PostPage:
        """Find a page of one author's posts, newest first."""
        with logfire.span(
            "post_repository.find_by_author",
            author_username=author_username.root,
            limit=limit,
            offset=offset,
        ):
            condition = posts_table.c.author_username == author_username.root
            stmt = (
                select(posts_table, func.count().over().label("total_count"))
                .where(condition)
                .order_by(desc(posts_table.c.created_at), desc(posts_table.c.id))
                .limit(limit)
                .offset(offset)
            )
            rows = (await self.session.execute(stmt)).fetchall()

            if rows:
                total = rows[0].total_count
            else:
                count_stmt = (
                    select(func.count()).select_from(posts_table).where(condition)
                )
                total = (await self.session.execute(count_stmt)).scalar() or 0

            return PostPage(posts=[row_to_post(r._asdict()) for r in rows], total=total)

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            existing = await self.find_by_id(post.id)
            post_dict = post_to_dict(post)

            if existing:
                stmt = (
                    posts_table.update()
                    .where(posts_table.c.id == post.id)
                    .values(**post_dict)
                )
            else:
                stmt = posts_table.insert().values(**post_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def increment_points(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically add delta to points."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(points=posts_table.c.points + delta)
            .returning(posts_table.c.points)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar_one_or_none()

    async def increment_comment_count(self, post_id: PostId, delta: int = 1) -> None:
        """Atomically add delta to comment_count (never below zero)."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(
                comment_count=func.greatest(posts_table.c.comment_count + delta, 0)
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
