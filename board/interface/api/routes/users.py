"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from board.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
)
from board.domain.error import DomainError
from board.interface.error import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{username}", response_model=GetUserProfileResponse)
async def get_user_profile(
    username: str,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
    page: int | None = None,
    page_size: int | None = None,
) -> GetUserProfileResponse:
    """A user's posts and comments, newest first. No authentication needed.

    Raises:
        HTTPException: 404 if the user has never posted or commented
    """
    try:
        return await get_user_profile_use_case.execute(
            GetUserProfileRequest(username=username, page=page, page_size=page_size)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e, "get user profile")
