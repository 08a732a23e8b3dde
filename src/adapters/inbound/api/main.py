"""FastAPI application for the site analytics proxy."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain.exceptions import SiteAnalyticsError
from ....common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .routers import analytics, health

logger = logging.getLogger(__name__)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = settings.debug


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup and report the analytics mode."""
    setup_logging(
        level=settings.log_level, log_file=settings.log_file, json_format=settings.log_json
    )
    logger.info("Site analytics API starting up...")
    logger.info(
        "Analytics mode: %s", "Cloudflare" if settings.has_credentials else "mock data"
    )
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")
    yield
    logger.info("Site analytics API shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Site Analytics API",
    description=(
        "Visitor statistics for the company website, aggregated from the "
        "Cloudflare GraphQL Analytics API."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS for the site frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(analytics.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(SiteAnalyticsError)
async def site_analytics_error_handler(request: Request, exc: SiteAnalyticsError) -> JSONResponse:
    """Handle SiteAnalyticsError exceptions with a structured JSON response.

    Args:
        request: The incoming request.
        exc: The raised exception.

    Returns:
        JSONResponse with structured error details.
    """
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=exc.to_dict(include_trace=DEBUG_MODE),
        headers={"Cache-Control": "no-cache"},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions with a structured JSON response.

    Args:
        request: The incoming request.
        exc: The unhandled exception.

    Returns:
        JSONResponse with structured error details.
    """
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
        headers={"Cache-Control": "no-cache"},
    )


# Export for uvicorn
__all__ = ["app"]
