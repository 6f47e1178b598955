"""PostgreSQL implementation of Vote repository."""

import asyncio
from typing import Optional, Union
from uuid import UUID

import logfire
from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.domain.error import TransientLookupError
from board.domain.model import Vote
from board.domain.repository import VoteRepository
from board.domain.value import CommentId, PostId, UserId, VotableType, VoteDirection
from board.persistence.mappers import row_to_vote, vote_to_dict
from board.persistence.tables import votes_table

_BatchKey = tuple[UserId, VotableType]


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session for the request's unit of work
            session_factory: Source of a short-lived session for batched
                read-only lookups, so they never wait on the request session.
                Falls back to the request session when absent.
        """
        self.session = session
        self.session_factory = session_factory
        self._batches: dict[_BatchKey, dict[UUID, asyncio.Future]] = {}
        self._flushes: set[asyncio.Task] = set()

    @staticmethod
    def _votable_clause(
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ):
        return and_(
            votes_table.c.user_id == user_id,
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id == votable_id,
        )

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            self._votable_clause(user_id, votable_type, votable_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def get_direction(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> VoteDirection:
        """Look up a vote direction.

        Lookups issued in the same event-loop turn, such as one per post on a
        listing page, are answered by a single ``IN`` query on one session.
        When that query fails, every lookup in the batch raises
        TransientLookupError.
        """
        loop = asyncio.get_running_loop()
        key = (user_id, votable_type)
        batch = self._batches.get(key)
        if batch is None:
            batch = self._batches[key] = {}
            loop.call_soon(self._schedule_flush, key)

        future = batch.get(votable_id)
        if future is None:
            future = batch[votable_id] = loop.create_future()
        # One caller timing out must not cancel the answer for the others
        return await asyncio.shield(future)

    def _schedule_flush(self, key: _BatchKey) -> None:
        task = asyncio.ensure_future(self._flush(key))
        self._flushes.add(task)
        task.add_done_callback(self._flushes.discard)

    async def _flush(self, key: _BatchKey) -> None:
        batch = self._batches.pop(key)
        user_id, votable_type = key
        stmt = select(votes_table.c.votable_id, votes_table.c.direction).where(
            votes_table.c.user_id == user_id,
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id.in_(list(batch)),
        )

        try:
            rows = await self._read_only(stmt)
        except SQLAlchemyError as e:
            self._fail(batch, TransientLookupError("vote", str(e)))
            return
        except Exception as e:
            self._fail(batch, e)
            return

        found = {row.votable_id: VoteDirection(row.direction) for row in rows}
        logfire.debug("Vote directions loaded", requested=len(batch), found=len(found))
        for votable_id, future in batch.items():
            if not future.done():
                future.set_result(found.get(votable_id, VoteDirection.NONE))

    async def _read_only(self, stmt):
        if self.session_factory is None:
            return (await self.session.execute(stmt)).all()
        async with self.session_factory() as session:
            return (await session.execute(stmt)).all()

    @staticmethod
    def _fail(batch: dict[UUID, asyncio.Future], error: Exception) -> None:
        logfire.warn("Vote direction lookup failed", count=len(batch), error=str(error))
        for future in batch.values():
            if not future.done():
                future.set_exception(error)

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (insert, or update the direction in place)."""
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == vote.id)
            .values(direction=int(vote.direction))
            .returning(votes_table.c.id)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            await self.session.execute(insert(votes_table).values(**vote_to_dict(vote)))
        await self.session.flush()
        return vote
