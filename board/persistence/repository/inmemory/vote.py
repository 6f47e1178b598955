"""In-memory vote repository for testing."""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from board.domain.model.vote import Vote
from board.domain.repository.vote import VoteRepository
from board.domain.value import CommentId, PostId, UserId, VotableType, VoteDirection


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        votable_uuid = UUID(str(votable_id))
        for vote in self._votes:
            if (
                vote.user_id == user_id
                and vote.votable_type == votable_type
                and vote.votable_id == votable_uuid
            ):
                return vote
        return None

    async def get_direction(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
    ) -> VoteDirection:
        vote = await self.find_by_user_and_votable(user_id, votable_type, votable_id)
        return vote.direction if vote else VoteDirection.NONE

    async def save(self, vote: Vote) -> Vote:
        """Save a vote, replacing one with the same ID.

        Raises:
            IntegrityError: If another vote exists for the same user and item
        """
        for index, stored in enumerate(self._votes):
            if stored.id == vote.id:
                self._votes[index] = vote
                return vote

        existing = await self.find_by_user_and_votable(
            vote.user_id, vote.votable_type, vote.votable_id
        )
        if existing:
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes.append(vote)
        return vote
