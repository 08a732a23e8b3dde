"""Cloudflare GraphQL Analytics API client."""

import logging
from typing import Any

import requests

from ...core.domain import AnalyticsQuery, CountryTraffic, TrafficBucket, ZoneTraffic
from ...core.domain.exceptions import (
    MissingCredentialsError,
    UpstreamConnectionError,
    UpstreamGraphQLError,
    UpstreamHTTPError,
    UpstreamResponseError,
)

logger = logging.getLogger(__name__)

# Constants
REQUEST_TIMEOUT = 15
MAX_ERROR_BODY = 500

ZONE_ANALYTICS_QUERY = """
query GetZoneAnalytics($zoneTag: string!, $since: Date!, $until: Date!, $limit: Int!) {
  viewer {
    zones(filter: { zoneTag: $zoneTag }) {
      httpRequests1dGroups(
        limit: $limit
        orderBy: [date_ASC]
        filter: { date_geq: $since, date_leq: $until }
      ) {
        dimensions {
          date
        }
        sum {
          pageViews
          requests
          countryMap {
            clientCountryName
            requests
            pageViews
          }
        }
        uniq {
          uniques
        }
      }
    }
  }
}
"""


def _as_int(value: Any) -> int:
    """Coerce a numeric field to a non-negative int, treating junk as 0."""
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(number, 0)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


class CloudflareGraphQLAdapter:
    """Client for the Cloudflare GraphQL Analytics API."""

    BASE_URL = "https://api.cloudflare.com/client/v4/graphql"

    def __init__(
        self,
        api_token: str,
        url: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the client.

        Args:
            api_token: Cloudflare API token with Zone Analytics:Read.
            url: GraphQL endpoint, defaults to Cloudflare's public one.
            timeout: Request timeout in seconds.

        Raises:
            MissingCredentialsError: If no API token is given.
        """
        if not api_token:
            raise MissingCredentialsError("Cloudflare API token is required")
        self.url = url or self.BASE_URL
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_token}",
                "Content-Type": "application/json",
                "User-Agent": "Site-Analytics-Proxy/1.0",
            }
        )

    def __enter__(self) -> "CloudflareGraphQLAdapter":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close session."""
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def _post(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a GraphQL query and return its ``data`` object.

        Args:
            query: GraphQL query document.
            variables: Query variables.

        Returns:
            The ``data`` member of the GraphQL response.

        Raises:
            UpstreamConnectionError: Network failure or timeout.
            UpstreamHTTPError: Non-2xx status.
            UpstreamResponseError: Body is not a JSON object.
            UpstreamGraphQLError: Response carries GraphQL errors.
        """
        try:
            response = self.session.post(
                self.url,
                json={"query": query, "variables": variables},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamConnectionError(
                f"Could not reach analytics API: {e}", cause=e, context={"url": self.url}
            ) from e

        if not response.ok:
            body = response.text[:MAX_ERROR_BODY]
            raise UpstreamHTTPError(
                f"API error {response.status_code}: {body}",
                context={"status": response.status_code, "url": self.url},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamResponseError(
                "Analytics API returned invalid JSON", cause=e, context={"url": self.url}
            ) from e

        if not isinstance(payload, dict):
            raise UpstreamResponseError(
                "Analytics API returned an unexpected payload",
                context={"type": type(payload).__name__},
            )

        errors = payload.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            messages = [
                err.get("message", str(err)) if isinstance(err, dict) else str(err)
                for err in errors
            ]
            raise UpstreamGraphQLError(
                f"GraphQL error: {'; '.join(messages)}", context={"errors": errors}
            )

        data = payload.get("data")
        return data if isinstance(data, dict) else {}

    def fetch_zone_traffic(self, query: AnalyticsQuery) -> ZoneTraffic:
        """Fetch daily traffic groups for a zone.

        Args:
            query: Zone and time window to fetch.

        Returns:
            ZoneTraffic with one TrafficBucket per daily group.

        Raises:
            UpstreamResponseError: The body has no zone or cannot be parsed.
        """
        variables = {
            "zoneTag": query.zone_id,
            "since": query.since.isoformat(),
            "until": query.until.isoformat(),
            "limit": query.limit,
        }
        data = self._post(ZONE_ANALYTICS_QUERY, variables)

        zones = _as_list(_as_dict(data.get("viewer")).get("zones"))
        if not zones or not isinstance(zones[0], dict):
            raise UpstreamResponseError(
                "No data returned from GraphQL API",
                context={"since": variables["since"], "until": variables["until"]},
            )

        groups = _as_list(zones[0].get("httpRequests1dGroups"))
        try:
            buckets = [self._parse_group(group) for group in groups if isinstance(group, dict)]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise UpstreamResponseError(
                f"Could not parse analytics groups: {e}", cause=e, context={"groups": len(groups)}
            ) from e
        logger.debug(f"Parsed {len(buckets)} daily groups")
        return ZoneTraffic(buckets=buckets)

    @staticmethod
    def _parse_group(group: dict[str, Any]) -> TrafficBucket:
        """Convert one ``httpRequests1dGroups`` entry to a TrafficBucket."""
        dimensions = _as_dict(group.get("dimensions"))
        sums = _as_dict(group.get("sum"))
        uniq = _as_dict(group.get("uniq"))

        countries = []
        for row in _as_list(sums.get("countryMap")):
            if not isinstance(row, dict):
                continue
            countries.append(
                CountryTraffic(
                    country=row.get("clientCountryName") or "",
                    page_views=_as_int(row.get("pageViews")),
                    requests=_as_int(row.get("requests")),
                )
            )

        return TrafficBucket(
            date=str(dimensions.get("date") or ""),
            page_views=_as_int(sums.get("pageViews")),
            requests=_as_int(sums.get("requests")),
            unique_visitors=_as_int(uniq.get("uniques")),
            countries=countries,
        )
