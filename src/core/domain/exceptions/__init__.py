"""Custom exception hierarchy for the site analytics proxy.

Import from this package directly:

    from src.core.domain.exceptions import SiteAnalyticsError, UpstreamHTTPError
"""

# Base classes
from .base import ExceptionContext, SiteAnalyticsError

# Configuration exceptions
from .configuration import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingCredentialsError,
)

# Upstream exceptions
from .upstream import (
    UpstreamConnectionError,
    UpstreamError,
    UpstreamGraphQLError,
    UpstreamHTTPError,
    UpstreamResponseError,
)

__all__ = [
    # Base
    "ExceptionContext",
    "SiteAnalyticsError",
    # Configuration
    "ConfigurationError",
    "MissingCredentialsError",
    "InvalidConfigurationError",
    # Upstream
    "UpstreamError",
    "UpstreamConnectionError",
    "UpstreamHTTPError",
    "UpstreamResponseError",
    "UpstreamGraphQLError",
]
