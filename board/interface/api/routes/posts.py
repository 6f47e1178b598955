"""Post routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import BaseModel, Field

from board.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from board.config import ListingSettings
from board.domain.error import DomainError
from board.domain.repository.post import PostSortOrder
from board.domain.service import JWTService
from board.interface.api.identity import optional_user_id, require_identity
from board.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=300)
    url: str | None = Field(default=None, max_length=2048)
    text: str | None = Field(default=None, max_length=10000)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    listing_settings: FromDishka[ListingSettings],
    page: int | None = None,
    page_size: int | None = None,
    sort: PostSortOrder = PostSortOrder.NEW,
    q: str | None = Query(default=None, max_length=300),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """List posts with search, sorting and pagination.

    Out-of-range paging values are normalised rather than rejected: page and
    page_size fall back to their defaults when missing or non-positive, and
    page_size is capped at the configured maximum.

    Args:
        list_posts_use_case: List posts use case from DI
        jwt_service: JWT service for token verification (injected)
        listing_settings: Listing settings (injected)
        page: 1-based page number
        page_size: Posts per page
        sort: Sort order (new, top or best)
        q: Case-insensitive title search
        auth_token: JWT token from cookie (optional)

    Returns:
        One page of posts with totals
    """
    if page_size is not None:
        page_size = min(page_size, listing_settings.max_page_size)

    request = ListPostsRequest(
        page=page,
        page_size=page_size,
        sort=sort,
        search=q,
        user_id=optional_user_id(jwt_service, auth_token),
    )

    try:
        return await list_posts_use_case.execute(request)
    except (DomainError, ValueError) as e:
        raise to_http_exception(e, "list posts")


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePostResponse:
    """Create a new link or text post.

    Requires authentication. Exactly one of url and text must be given.

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    identity = require_identity(jwt_service, auth_token, "create posts")

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                title=request.title,
                author_id=identity.user_id,
                author_username=identity.username,
                url=request.url,
                text=request.text,
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e, "create post")


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetPostResponse:
    """Get a post with its full comment thread.

    Args:
        post_id: Post UUID
        get_post_use_case: Get post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie (optional)

    Raises:
        HTTPException: 404 if the post doesn't exist
    """
    try:
        return await get_post_use_case.execute(
            GetPostRequest(
                post_id=str(post_id),
                user_id=optional_user_id(jwt_service, auth_token),
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e, "fetch post")
    except HTTPException:
        raise
    except Exception as e:
        logfire.error(
            "Unexpected error fetching post", post_id=str(post_id), error=str(e)
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch post",
        )
