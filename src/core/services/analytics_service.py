"""Visitor statistics summary with mock and error fallbacks."""

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime

from ...common.exception_handler import log_exception
from ..domain import (
    AnalyticsOutcome,
    AnalyticsQuery,
    CredentialStatus,
    ResultKind,
    Totals,
)
from ..domain.exceptions import InvalidConfigurationError, UpstreamError
from ..ports.analytics_port import AnalyticsSourcePort
from .aggregation import aggregate_countries, build_timeseries, rank_countries, sum_totals
from .mock_data import MOCK_MESSAGE, mock_countries, mock_totals

logger = logging.getLogger(__name__)

# Upper bound of the daily-group range Cloudflare will serve
MAX_WINDOW_DAYS = 364

ERROR_MESSAGE = "Failed to fetch Cloudflare Analytics. Check API token permissions."
REAL_MESSAGE = "Cloudflare Analytics for the last {days} days."


def _utc_today() -> date:
    return datetime.now(UTC).date()


class AnalyticsService:
    """Produces the normalized visitor summary served at /api/analytics.

    The service never raises for upstream problems: any UpstreamError is
    logged and turned into an ERROR outcome with zeroed totals.
    """

    def __init__(
        self,
        credentials: CredentialStatus,
        source_factory: Callable[[], AnalyticsSourcePort] | None,
        zone_id: str = "",
        window_days: int = 30,
        top_n: int = 10,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        """Initialize the service.

        Args:
            credentials: Which credentials are configured (no secrets).
            source_factory: Builds a fresh upstream source per call; None
                when credentials are missing.
            zone_id: Zone tag to query.
            window_days: Size of the trailing window in days.
            top_n: Number of countries to keep in the ranking.
            today: Clock used to anchor the window.

        Raises:
            InvalidConfigurationError: If the window or top-N is out of range.
        """
        if not 1 <= window_days <= MAX_WINDOW_DAYS:
            raise InvalidConfigurationError(
                f"window_days must be between 1 and {MAX_WINDOW_DAYS}",
                context={"window_days": window_days},
            )
        if top_n < 1:
            raise InvalidConfigurationError("top_n must be at least 1", context={"top_n": top_n})

        self.credentials = credentials
        self.source_factory = source_factory
        self.zone_id = zone_id
        self.window_days = window_days
        self.top_n = top_n
        self.today = today

    @property
    def is_configured(self) -> bool:
        """True when real analytics can be queried."""
        return (
            self.credentials.has_token
            and self.credentials.has_zone_id
            and self.source_factory is not None
        )

    def get_summary(self) -> AnalyticsOutcome:
        """Build the visitor summary for the current request.

        Returns:
            A MOCK, REAL or ERROR AnalyticsOutcome.
        """
        if not self.is_configured:
            logger.info("Analytics credentials not configured, serving mock data")
            return self._mock_outcome()

        query = AnalyticsQuery.trailing_window(self.zone_id, self.window_days, self.today())
        logger.info("Fetching zone analytics from %s to %s", query.since, query.until)

        source = self.source_factory()  # type: ignore[misc]
        try:
            traffic = source.fetch_zone_traffic(query)
        except UpstreamError as exc:
            log_exception(exc, log=logger, extra_context={"zone": self.credentials.zone_id_value})
            return self._error_outcome(exc)
        finally:
            source.close()

        outcome = AnalyticsOutcome(
            kind=ResultKind.REAL,
            message=REAL_MESSAGE.format(days=self.window_days),
            credentials=self.credentials,
            totals=sum_totals(traffic.buckets),
            countries=rank_countries(aggregate_countries(traffic.buckets), self.top_n),
            timeseries=build_timeseries(traffic.buckets),
            period=(query.since, query.until),
        )
        logger.info(
            "Aggregated %d daily buckets: %d page views across %d countries",
            len(traffic.buckets),
            outcome.totals.page_views,
            len(outcome.countries),
        )
        return outcome

    def _mock_outcome(self) -> AnalyticsOutcome:
        return AnalyticsOutcome(
            kind=ResultKind.MOCK,
            message=MOCK_MESSAGE,
            credentials=self.credentials,
            totals=mock_totals(),
            countries=mock_countries(),
        )

    def _error_outcome(self, exc: UpstreamError) -> AnalyticsOutcome:
        return AnalyticsOutcome(
            kind=ResultKind.ERROR,
            message=ERROR_MESSAGE,
            credentials=self.credentials,
            totals=Totals(),
            countries=[],
            error=exc.message,
        )
