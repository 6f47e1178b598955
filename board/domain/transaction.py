"""Unit-of-work commit hooks.

Writes run inside the request's transaction and only become visible to other
requests once it commits. Work that must observe the committed state, such as
dropping cached listings, is registered here instead of being run inline.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable


class CommitHooks(ABC):
    """Callbacks to run once the current unit of work has committed."""

    @abstractmethod
    def after_commit(self, callback: Callable[[], None]) -> None:
        """Run callback after a successful commit.

        Callbacks run in registration order. They are discarded if the unit
        of work rolls back.
        """
        pass
