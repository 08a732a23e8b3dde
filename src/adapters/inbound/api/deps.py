"""FastAPI dependency wiring for the analytics service."""

import logging

from fastapi import Depends

from ....adapters.outbound.cloudflare_adapter import CloudflareGraphQLAdapter
from ....config.settings import Settings, settings
from ....core.domain import CredentialStatus
from ....core.services.analytics_service import AnalyticsService

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    """Return the process-wide settings."""
    return settings


def build_analytics_service(config: Settings) -> AnalyticsService:
    """Build an AnalyticsService from settings.

    A new Cloudflare client is created for every summary so no HTTP session
    outlives a request.
    """
    credentials = CredentialStatus(
        has_token=bool(config.cf_api_token),
        has_zone_id=bool(config.cf_zone_id),
        zone_id_value=config.masked_zone_id,
    )

    source_factory = None
    logger.debug("Building analytics service (credentials configured: %s)", config.has_credentials)
    if config.has_credentials:

        def source_factory() -> CloudflareGraphQLAdapter:
            return CloudflareGraphQLAdapter(
                api_token=config.cf_api_token,
                url=config.cf_graphql_url,
                timeout=config.request_timeout,
            )

    return AnalyticsService(
        credentials=credentials,
        source_factory=source_factory,
        zone_id=config.cf_zone_id,
        window_days=config.analytics_window_days,
        top_n=config.analytics_top_countries,
    )


def get_analytics_service(config: Settings = Depends(get_settings)) -> AnalyticsService:
    """Per-request AnalyticsService built from current settings."""
    return build_analytics_service(config)
