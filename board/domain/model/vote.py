"""Vote entity.

Each user holds at most one vote per item (post or comment), up or down.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from board.domain.model.common import DomainModel
from board.domain.model.post import utc_now
from board.domain.value import UserId, VotableType, VoteDirection, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by database unique constraint)
    - Direction is UP or DOWN; changing direction updates the same record
    - Polymorphic reference to votable (post or comment)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # PostId or CommentId (both are UUIDs)
    direction: VoteDirection
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("direction")
    @classmethod
    def validate_direction(cls, v: VoteDirection) -> VoteDirection:
        if v == VoteDirection.NONE:
            raise ValueError("A stored vote must be up or down")
        return v
