"""Configuration-related exceptions."""

from .base import SiteAnalyticsError


class ConfigurationError(SiteAnalyticsError):
    """Configuration or environment variable errors."""

    error_code = "SA_CFG_001"


class MissingCredentialsError(ConfigurationError):
    """Cloudflare API token or zone id is not configured."""

    error_code = "SA_CFG_002"


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid."""

    error_code = "SA_CFG_003"
