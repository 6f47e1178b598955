"""Vote domain service."""

from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from board.domain.error import DomainError, ValidationError
from board.domain.model.vote import Vote
from board.domain.repository import VoteRepository
from board.domain.value import (
    CommentId,
    PostId,
    UserId,
    VotableType,
    VoteDirection,
    VoteId,
)
from board.domain.value.common import ValueObject

from .base import Service
from .comment_service import CommentService
from .post_service import PostService


class VoteResult(ValueObject):
    """Outcome of casting a vote."""

    points: int
    user_vote: VoteDirection
    changed: bool


def vote_delta(previous: VoteDirection, direction: VoteDirection) -> int:
    """Point change caused by moving a vote from previous to direction.

    none -> up is +1, none -> down is -1, a flip is +/-2, and repeating the
    same direction changes nothing.
    """
    return int(direction) - int(previous)


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.vote_repository = vote_repository
        self.post_service = post_service
        self.comment_service = comment_service

    async def cast_vote(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
        direction: VoteDirection,
    ) -> VoteResult:
        """Record a user's up or down vote on a post or comment.

        Point totals change by atomic increments at the store, so concurrent
        votes from different users never lose updates.

        Args:
            user_id: Voting user
            votable_type: Post or comment
            votable_id: Target ID
            direction: UP or DOWN

        Returns:
            The target's point total and the user's resulting vote

        Raises:
            ValidationError: If direction is NONE
            NotFoundError: If the target doesn't exist
            DomainError: If a concurrent vote by the same user won the race
        """
        if direction == VoteDirection.NONE:
            raise ValidationError("Vote direction must be up or down")

        with logfire.span(
            "vote_service.cast_vote",
            user_id=str(user_id),
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            direction=int(direction),
        ):
            current_points = await self._current_points(votable_type, votable_id)

            existing = await self.vote_repository.find_by_user_and_votable(
                user_id, votable_type, votable_id
            )
            previous = existing.direction if existing else VoteDirection.NONE

            if previous == direction:
                logfire.info("Repeated vote ignored", votable_id=str(votable_id))
                return VoteResult(
                    points=current_points, user_vote=direction, changed=False
                )

            if existing:
                vote = existing.model_copy(update={"direction": direction})
            else:
                vote = Vote(
                    id=VoteId(uuid4()),
                    user_id=user_id,
                    votable_type=votable_type,
                    votable_id=UUID(str(votable_id)),
                    direction=direction,
                )

            try:
                await self.vote_repository.save(vote)
            except IntegrityError:
                logfire.warn(
                    "Concurrent duplicate vote",
                    user_id=str(user_id),
                    votable_id=str(votable_id),
                )
                raise DomainError("Vote already recorded, please retry")

            delta = vote_delta(previous, direction)
            if votable_type == VotableType.POST:
                points = await self.post_service.change_points(PostId(votable_id), delta)
            else:
                points = await self.comment_service.change_points(
                    CommentId(votable_id), delta
                )

            logfire.info(
                "Vote recorded",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                previous=int(previous),
                direction=int(direction),
                points=points,
            )
            return VoteResult(points=points, user_vote=direction, changed=True)

    async def get_user_vote(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
    ) -> VoteDirection:
        """The user's current vote on an item (NONE if they haven't voted)."""
        return await self.vote_repository.get_direction(
            user_id, votable_type, votable_id
        )

    async def _current_points(
        self, votable_type: VotableType, votable_id: PostId | CommentId
    ) -> int:
        if votable_type == VotableType.POST:
            post = await self.post_service.require_post(PostId(votable_id))
            return post.points
        comment = await self.comment_service.require_comment(CommentId(votable_id))
        return comment.points
