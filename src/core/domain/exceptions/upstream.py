"""Exceptions raised while talking to the Cloudflare Analytics API."""

from .base import SiteAnalyticsError


class UpstreamError(SiteAnalyticsError):
    """Base error for upstream analytics calls."""

    error_code = "SA_UPS_001"


class UpstreamConnectionError(UpstreamError):
    """Could not reach the analytics API.

    Common causes:
    - DNS or network failure
    - Request timed out
    """

    error_code = "SA_UPS_002"


class UpstreamHTTPError(UpstreamError):
    """Analytics API answered with a non-2xx status.

    A 403 usually means the token lacks the Zone Analytics:Read permission.
    """

    error_code = "SA_UPS_003"


class UpstreamResponseError(UpstreamError):
    """Analytics API answered with a body we could not use.

    Covers invalid JSON, a non-object payload and a response without
    the requested zone.
    """

    error_code = "SA_UPS_004"


class UpstreamGraphQLError(UpstreamError):
    """GraphQL response carried an ``errors`` array."""

    error_code = "SA_UPS_005"
