"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter
from pydantic import BaseModel

from board.config import Settings
from board.domain.cache import QueryCache

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str
    environment: str
    cached_queries: int


@router.get("/health", response_model=HealthResponse)
@inject
async def health_check(
    settings: FromDishka[Settings], cache: FromDishka[QueryCache]
) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Health status indicating the service is running
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
        git_sha=settings.git_sha,
        environment=settings.environment,
        cached_queries=cache.stats().size,
    )
