"""Request identity helpers for routes."""

from fastapi import HTTPException, status

from board.domain.service import JWTService
from board.util.jwt import TokenPayload


def require_identity(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> TokenPayload:
    """Return the caller's verified identity or reject the request with 401.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie
        action: What the caller is trying to do, used in the error detail
    """
    identity = jwt_service.get_identity_from_token(auth_token)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return identity


def optional_user_id(jwt_service: JWTService, auth_token: str | None) -> str | None:
    """User id for personalised reads; anonymous when the token is missing or bad."""
    identity = jwt_service.get_identity_from_token(auth_token)
    return identity.user_id if identity else None
