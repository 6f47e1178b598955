"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from board.domain.model.vote import Vote
from board.domain.value import CommentId, PostId, UserId, VotableType, VoteDirection


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_direction(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> VoteDirection:
        """Read-only lookup of a user's vote direction on an item.

        Safe to call concurrently for many items at once.

        Returns:
            UP or DOWN, or NONE when the user hasn't voted

        Raises:
            TransientLookupError: If the store could not answer
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a vote (insert, or update the direction of an existing one).

        Raises:
            IntegrityError: If a different vote already exists for this
                user/votable combination (unique constraint violation)
        """
        pass
