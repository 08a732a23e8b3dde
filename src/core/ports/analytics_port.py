"""Port definition for upstream analytics sources."""

from typing import Protocol

from ..domain import AnalyticsQuery, ZoneTraffic


class AnalyticsSourcePort(Protocol):
    """Port for fetching pre-aggregated zone traffic."""

    def fetch_zone_traffic(self, query: AnalyticsQuery) -> ZoneTraffic:
        """Fetch daily traffic buckets for a zone.

        Args:
            query: Zone and time window to fetch.

        Returns:
            ZoneTraffic with one bucket per day returned upstream.

        Raises:
            UpstreamError: If the upstream call fails in any way.
        """
        ...

    def close(self) -> None:
        """Release any held resources."""
        ...
