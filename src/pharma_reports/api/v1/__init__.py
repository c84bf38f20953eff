"""API v1 router."""

from fastapi import APIRouter

from pharma_reports.api.v1 import health, reports, sources

router = APIRouter()

# Include sub-routers
router.include_router(health.router, tags=["Health"])
router.include_router(reports.router, prefix="/reports", tags=["Reports"])
router.include_router(sources.router, prefix="/sources", tags=["Sources"])
