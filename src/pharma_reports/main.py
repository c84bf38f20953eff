"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from pharma_reports import __version__
from pharma_reports.api.v1 import router as api_v1_router
from pharma_reports.core.app_config import get_app_config
from pharma_reports.core.config import get_settings
from pharma_reports.core.exceptions import AppException, app_exception_handler, http_exception_handler
from pharma_reports.middleware.logging import RequestLoggingMiddleware, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()

    setup_logging(settings.log_level, settings.log_format)

    # Validate central configuration (fail fast on startup)
    try:
        app_config = get_app_config()
        logger.info(
            "Configuration loaded: %d authoritative domains, %d site searches",
            len(app_config.sources.authoritative_domains),
            len(app_config.sources.site_searches),
        )
    except Exception as e:
        logger.critical("Failed to load configuration: %s", e)
        raise SystemExit(1) from e

    logger.info("Application started: env=%s", settings.app_env)

    yield

    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Structures AI-generated pharmaceutical reports into tables with resolved citations",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)

    # Include API routers
    app.include_router(api_v1_router, prefix="/api/v1")

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancers."""
        return {"status": "healthy", "service": "pharma-reports"}

    return app


# Create application instance
app = create_app()
