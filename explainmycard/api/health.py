"""
Health check endpoint.

The engine has no database or required external dependency, so liveness
is the only probe.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from explainmycard.config import settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    ai_enabled: bool


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running. Does not call Scryfall or the AI.
    """
    return HealthResponse(
        status="healthy",
        ai_enabled=settings.ai_enabled and bool(settings.anthropic_api_key),
    )
