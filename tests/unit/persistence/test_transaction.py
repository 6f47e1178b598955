"""Unit tests for commit hooks.

Sessions here have no bind; committing a transaction that never touched a
connection still fires the session events.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from board.persistence.transaction import ImmediateCommitHooks, SessionCommitHooks


class TestSessionCommitHooks:
    """Tests for SessionCommitHooks."""

    @pytest.mark.asyncio
    async def test_callbacks_run_in_order_after_commit(self):
        session = AsyncSession()
        hooks = SessionCommitHooks(session)
        calls = []

        hooks.after_commit(lambda: calls.append("first"))
        hooks.after_commit(lambda: calls.append("second"))
        assert calls == []

        await session.commit()

        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_callbacks_run_once(self):
        session = AsyncSession()
        hooks = SessionCommitHooks(session)
        calls = []
        hooks.after_commit(lambda: calls.append("x"))

        await session.commit()
        await session.commit()

        assert calls == ["x"]

    @pytest.mark.asyncio
    async def test_rollback_discards_callbacks(self):
        session = AsyncSession()
        hooks = SessionCommitHooks(session)
        calls = []

        await session.begin()
        hooks.after_commit(lambda: calls.append("x"))
        await session.rollback()
        await session.commit()

        assert calls == []

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_stop_the_rest(self):
        session = AsyncSession()
        hooks = SessionCommitHooks(session)
        calls = []

        def boom():
            raise RuntimeError("cache down")

        hooks.after_commit(boom)
        hooks.after_commit(lambda: calls.append("after"))

        await session.commit()

        assert calls == ["after"]


class TestImmediateCommitHooks:
    """Tests for ImmediateCommitHooks."""

    def test_runs_callback_at_once(self):
        calls = []

        ImmediateCommitHooks().after_commit(lambda: calls.append("x"))

        assert calls == ["x"]
