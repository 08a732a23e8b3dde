"""Health check and ping endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .....config.settings import Settings
from .....core.services.mock_data import MOCK_COUNTRIES, MOCK_TOTALS
from ..deps import get_settings
from ..models import HealthResponse, PingResponse

API_VERSION = "1.0.0"

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(config: Settings = Depends(get_settings)) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        HealthResponse with status, version and whether real analytics
        are configured.
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        analytics="configured" if config.has_credentials else "mock",
    )


@router.get("/api/test", response_model=PingResponse)
async def ping() -> JSONResponse:
    """Connectivity check that never touches the upstream API.

    Returns:
        Static figures with the current server timestamp.
    """
    body = {
        "message": "API is working",
        "timestamp": datetime.now(UTC).isoformat(),
        "data": {
            "pageViews": MOCK_TOTALS["page_views"],
            "uniqueVisitors": MOCK_TOTALS["unique_visitors"],
            "countries": len(MOCK_COUNTRIES),
        },
    }
    return JSONResponse(content=body, headers={"Cache-Control": "no-cache"})
