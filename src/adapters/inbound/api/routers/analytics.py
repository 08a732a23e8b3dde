"""Visitor statistics endpoint consumed by the site's stats widget."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .....core.services.analytics_service import AnalyticsService
from ..deps import get_analytics_service
from ..models import AnalyticsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analytics"])


@router.get(
    "/analytics",
    response_model=AnalyticsResponse,
    responses={
        500: {"model": AnalyticsResponse, "description": "Upstream analytics call failed"},
    },
)
def get_analytics(service: AnalyticsService = Depends(get_analytics_service)) -> JSONResponse:
    """Return visitor statistics for the configured zone.

    Serves mock data when no credentials are configured, real aggregated
    numbers on success, and zeroed totals with HTTP 500 when the upstream
    call fails.

    Args:
        service: The analytics service for this request.

    Returns:
        JSONResponse with the normalized payload and cache headers.
    """
    outcome = service.get_summary()
    logger.info("Serving %s analytics (status %d)", outcome.kind.value, outcome.status_code)

    return JSONResponse(
        status_code=outcome.status_code,
        content=outcome.to_payload(),
        headers={"Cache-Control": outcome.cache_control},
    )
