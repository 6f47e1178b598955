"""Vote routes."""

from typing import Literal
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from board.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from board.domain.error import DomainError
from board.domain.service import JWTService
from board.domain.value import VotableType, VoteDirection
from board.interface.api.identity import require_identity
from board.interface.error import to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting: 1 for up, -1 for down."""

    direction: Literal[1, -1]


async def _cast(
    votable_type: VotableType,
    votable_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> CastVoteResponse:
    identity = require_identity(jwt_service, auth_token, "vote")

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                votable_type=votable_type,
                votable_id=str(votable_id),
                user_id=identity.user_id,
                direction=VoteDirection(request.direction),
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e, f"vote on {votable_type.value}")


@router.post("/posts/{post_id}/vote", response_model=CastVoteResponse)
async def vote_on_post(
    post_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote a post up or down.

    Requires authentication. Voting the same direction twice is a no-op;
    voting the other direction flips the vote.
    """
    return await _cast(
        VotableType.POST, post_id, request, cast_vote_use_case, jwt_service, auth_token
    )


@router.post("/comments/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_on_comment(
    comment_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote a comment up or down. Requires authentication."""
    return await _cast(
        VotableType.COMMENT,
        comment_id,
        request,
        cast_vote_use_case,
        jwt_service,
        auth_token,
    )
