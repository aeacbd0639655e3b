"""
Health check route.

This endpoint is PUBLIC (no authentication required) and is not prefixed
with BASE_PATH, so load balancers can probe it at a fixed URL.
"""

from fastapi import APIRouter

from ticket_scanner.schemas.health import HealthResponse
from ticket_scanner.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """Public health check endpoint."""
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok")
