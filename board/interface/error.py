"""Interface layer errors.

Translates domain failures into HTTP responses.
"""

import logfire
from fastapi import HTTPException, status

from board.domain.error import (
    ContentDeletedException,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
)


def to_http_exception(error: Exception, action: str) -> HTTPException:
    """Map a domain or validation error raised while performing `action`.

    Args:
        error: The caught exception (a DomainError or ValueError)
        action: Short description used in logs, e.g. "create comment"

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, NotFoundError):
        logfire.warn(f"{action}: not found", error=str(error))
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, NotAuthorizedError):
        logfire.warn(f"{action}: not authorized", error=str(error))
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, ContentDeletedException):
        logfire.warn(f"{action}: content deleted", error=str(error))
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, (DomainError, ValueError)):
        logfire.warn(f"{action}: validation error", error=str(error))
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

    logfire.error(f"Unexpected error during {action}", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )
