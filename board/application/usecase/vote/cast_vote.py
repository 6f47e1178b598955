"""Cast vote use case."""

from functools import partial
from uuid import UUID

from pydantic import BaseModel

from board.application.cache import ListingCache
from board.application.usecase.base import BaseUseCase
from board.domain.service import VoteService
from board.domain.transaction import CommitHooks
from board.domain.value import CommentId, PostId, UserId, VotableType, VoteDirection


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str
    user_id: str
    direction: VoteDirection


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    votable_type: VotableType
    votable_id: str
    points: int
    user_vote: VoteDirection


class CastVoteUseCase(BaseUseCase):
    """Use case for voting a post or comment up or down."""

    def __init__(
        self,
        vote_service: VoteService,
        listing_cache: ListingCache,
        commit_hooks: CommitHooks,
    ) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            listing_cache: Listing cache (post points appear in listings)
            commit_hooks: Defers cache invalidation until the vote is committed
        """
        self.vote_service = vote_service
        self.listing_cache = listing_cache
        self.commit_hooks = commit_hooks

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Raises:
            ValidationError: If direction is NONE
            NotFoundError: If the target doesn't exist
        """
        votable_uuid = UUID(request.votable_id)
        votable_id = (
            PostId(votable_uuid)
            if request.votable_type == VotableType.POST
            else CommentId(votable_uuid)
        )

        result = await self.vote_service.cast_vote(
            user_id=UserId(UUID(request.user_id)),
            votable_type=request.votable_type,
            votable_id=votable_id,
            direction=request.direction,
        )

        if result.changed and request.votable_type == VotableType.POST:
            self.commit_hooks.after_commit(
                partial(self.listing_cache.on_post_changed, PostId(votable_uuid))
            )

        return CastVoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            points=result.points,
            user_vote=result.user_vote,
        )
