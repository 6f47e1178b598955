"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from board.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from board.domain.error import DomainError
from board.domain.service import JWTService
from board.interface.api.identity import require_identity
from board.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CommentTextAPIRequest(BaseModel):
    """API request carrying comment text."""

    text: str = Field(min_length=1, max_length=10000)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CommentTextAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Comment on a post.

    Requires authentication.

    Raises:
        HTTPException: If not authenticated, the post is missing, or validation fails
    """
    identity = require_identity(jwt_service, auth_token, "create comments")

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=str(post_id),
                author_id=identity.user_id,
                author_username=identity.username,
                text=request.text,
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e, "create comment")


@router.post(
    "/comments/{comment_id}/replies",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def reply_to_comment(
    comment_id: UUID,
    request: CommentTextAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Reply to a comment. The reply joins the parent's post.

    Raises:
        HTTPException: 409 when the parent was deleted
    """
    identity = require_identity(jwt_service, auth_token, "reply to comments")

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                parent_id=str(comment_id),
                author_id=identity.user_id,
                author_username=identity.username,
                text=request.text,
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e, "reply to comment")


@router.patch("/comments/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: UUID,
    request: CommentTextAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateCommentResponse:
    """Edit a comment's text. Only the author can edit."""
    identity = require_identity(jwt_service, auth_token, "edit comments")

    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=str(comment_id),
                user_id=identity.user_id,
                text=request.text,
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e, "update comment")


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment. Only the author can delete.

    A comment with replies is kept as a "[deleted]" placeholder; otherwise it
    is removed outright.
    """
    identity = require_identity(jwt_service, auth_token, "delete comments")

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=str(comment_id), user_id=identity.user_id)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e, "delete comment")
