"""Unit tests for batched vote direction lookups.

The session factory is a fake that records statements, so no database is
needed.
"""

import asyncio
from collections import namedtuple
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from board.domain.error import TransientLookupError
from board.domain.value import PostId, UserId, VotableType, VoteDirection
from board.persistence.repository.vote import PostgresVoteRepository

Row = namedtuple("Row", ["votable_id", "direction"])


class FakeResult:
    def __init__(self, rows):
        self._rows = rows

    def all(self):
        return self._rows


class FakeSession:
    def __init__(self, factory):
        self.factory = factory

    async def __aenter__(self):
        self.factory.opened += 1
        return self

    async def __aexit__(self, *exc):
        return False

    async def execute(self, stmt):
        self.factory.statements.append(stmt)
        if self.factory.error is not None:
            raise self.factory.error
        return FakeResult(self.factory.rows)


class FakeSessionFactory:
    """Stands in for async_sessionmaker."""

    def __init__(self, rows=(), error=None):
        self.rows = list(rows)
        self.error = error
        self.opened = 0
        self.statements = []

    def __call__(self):
        return FakeSession(self)


def _repo(factory):
    return PostgresVoteRepository(MagicMock(), session_factory=factory)


class TestVoteLookupBatching:
    """Tests for PostgresVoteRepository.get_direction."""

    @pytest.mark.asyncio
    async def test_concurrent_lookups_share_one_query(self):
        # Arrange
        user_id = UserId(uuid4())
        post_ids = [PostId(uuid4()) for _ in range(100)]
        factory = FakeSessionFactory(
            rows=[
                Row(post_ids[0], int(VoteDirection.UP)),
                Row(post_ids[1], int(VoteDirection.DOWN)),
            ]
        )
        repo = _repo(factory)

        # Act
        directions = await asyncio.gather(
            *(repo.get_direction(user_id, VotableType.POST, pid) for pid in post_ids)
        )

        # Assert
        assert factory.opened == 1
        assert len(factory.statements) == 1
        assert directions[0] == VoteDirection.UP
        assert directions[1] == VoteDirection.DOWN
        assert set(directions[2:]) == {VoteDirection.NONE}

    @pytest.mark.asyncio
    async def test_lookups_with_timeouts_still_batch(self):
        user_id = UserId(uuid4())
        post_ids = [PostId(uuid4()) for _ in range(10)]
        factory = FakeSessionFactory()
        repo = _repo(factory)

        directions = await asyncio.gather(
            *(
                asyncio.wait_for(
                    repo.get_direction(user_id, VotableType.POST, pid), timeout=1
                )
                for pid in post_ids
            )
        )

        assert len(factory.statements) == 1
        assert set(directions) == {VoteDirection.NONE}

    @pytest.mark.asyncio
    async def test_failed_query_fails_each_lookup(self):
        user_id = UserId(uuid4())
        factory = FakeSessionFactory(
            error=OperationalError("SELECT", {}, Exception("connection reset"))
        )
        repo = _repo(factory)

        results = await asyncio.gather(
            repo.get_direction(user_id, VotableType.POST, PostId(uuid4())),
            repo.get_direction(user_id, VotableType.POST, PostId(uuid4())),
            return_exceptions=True,
        )

        assert all(isinstance(r, TransientLookupError) for r in results)

    @pytest.mark.asyncio
    async def test_separate_turns_issue_separate_queries(self):
        user_id = UserId(uuid4())
        factory = FakeSessionFactory()
        repo = _repo(factory)

        await repo.get_direction(user_id, VotableType.POST, PostId(uuid4()))
        await repo.get_direction(user_id, VotableType.POST, PostId(uuid4()))

        assert len(factory.statements) == 2

    @pytest.mark.asyncio
    async def test_duplicate_ids_resolve_together(self):
        user_id = UserId(uuid4())
        post_id = PostId(uuid4())
        factory = FakeSessionFactory(rows=[Row(post_id, int(VoteDirection.UP))])
        repo = _repo(factory)

        first, second = await asyncio.gather(
            repo.get_direction(user_id, VotableType.POST, post_id),
            repo.get_direction(user_id, VotableType.POST, post_id),
        )

        assert first == second == VoteDirection.UP
        assert len(factory.statements) == 1
