"""Commit hook implementations."""

from collections.abc import Callable

import logfire
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.transaction import CommitHooks


class SessionCommitHooks(CommitHooks):
    """Runs callbacks from the session's ``after_commit`` event."""

    def __init__(self, session: AsyncSession) -> None:
        """Attach to a request session.

        Args:
            session: The request's async session
        """
        self._callbacks: list[Callable[[], None]] = []
        self._session = session.sync_session
        event.listen(self._session, "after_commit", self._run)
        event.listen(self._session, "after_soft_rollback", self._discard)

    def after_commit(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def _run(self, session) -> None:
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                # The transaction is already committed; nothing left to undo
                logfire.error("After-commit callback failed", error=str(e))

    def _discard(self, session, previous_transaction) -> None:
        if self._callbacks:
            logfire.info(
                "Rollback dropped after-commit callbacks", count=len(self._callbacks)
            )
        self._callbacks = []


class ImmediateCommitHooks(CommitHooks):
    """For stores without transactions: every write is already visible."""

    def after_commit(self, callback: Callable[[], None]) -> None:
        callback()
