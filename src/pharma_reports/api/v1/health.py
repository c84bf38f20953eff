"""Health check endpoint."""

import logging

from fastapi import APIRouter

from pharma_reports import __version__
from pharma_reports.schemas.common import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for monitoring and load balancer health checks."""
    logger.debug("Health check called")
    return HealthResponse(status="healthy", version=__version__)
