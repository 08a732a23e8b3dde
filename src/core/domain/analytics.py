"""Analytics models for queries, upstream buckets and summary outcomes."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any


class ResultKind(Enum):
    """Which path produced an analytics summary.

    Attributes:
        MOCK: No credentials configured; fixed demonstration data.
        REAL: Aggregated from a successful upstream call.
        ERROR: Upstream call failed; zeroed totals and no countries.
    """

    MOCK = "mock"
    REAL = "real"
    ERROR = "error"


@dataclass(frozen=True)
class AnalyticsQuery:
    """Parameters for one upstream analytics request.

    Attributes:
        zone_id: Cloudflare zone tag.
        since: First day of the window (inclusive).
        until: Last day of the window (inclusive).
        limit: Maximum number of daily groups to request.
    """

    zone_id: str
    since: date
    until: date
    limit: int

    @classmethod
    def trailing_window(cls, zone_id: str, days: int, today: date) -> "AnalyticsQuery":
        """Build a query covering ``days`` days up to and including ``today``."""
        if days < 1:
            raise ValueError("days must be at least 1")
        return cls(
            zone_id=zone_id,
            since=today - timedelta(days=days - 1),
            until=today,
            limit=days,
        )


@dataclass
class CountryTraffic:
    """Per-country traffic inside one bucket (or merged across buckets)."""

    country: str
    page_views: int = 0
    requests: int = 0


@dataclass
class TrafficBucket:
    """One pre-aggregated daily group returned by the analytics API."""

    date: str
    page_views: int = 0
    requests: int = 0
    unique_visitors: int = 0
    countries: list[CountryTraffic] = field(default_factory=list)


@dataclass
class ZoneTraffic:
    """Everything a source returned for one zone and window."""

    buckets: list[TrafficBucket] = field(default_factory=list)


@dataclass
class Totals:
    """Summed metrics over the whole window."""

    page_views: int = 0
    unique_visitors: int = 0
    requests: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "pageViews": self.page_views,
            "uniqueVisitors": self.unique_visitors,
            "requests": self.requests,
        }


@dataclass
class CountryStat:
    """A ranked country row."""

    country: str
    page_views: int
    requests: int
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "country": self.country,
            "pageViews": self.page_views,
            "requests": self.requests,
            "percentage": self.percentage,
        }


@dataclass
class DailyStat:
    """A single point of the daily timeseries."""

    date: str
    page_views: int
    unique_visitors: int
    requests: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "pageViews": self.page_views,
            "uniqueVisitors": self.unique_visitors,
            "requests": self.requests,
        }


@dataclass(frozen=True)
class CredentialStatus:
    """Non-secret view of the configured credentials."""

    has_token: bool
    has_zone_id: bool
    zone_id_value: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasToken": self.has_token,
            "hasZoneId": self.has_zone_id,
            "zoneIdValue": self.zone_id_value,
        }


@dataclass
class AnalyticsOutcome:
    """Tagged result of an analytics summary request.

    ``totals`` and ``countries`` are always populated so consumers can
    render them unconditionally; on the error path they are zero/empty.
    """

    kind: ResultKind
    message: str
    credentials: CredentialStatus
    totals: Totals = field(default_factory=Totals)
    countries: list[CountryStat] = field(default_factory=list)
    timeseries: list[DailyStat] = field(default_factory=list)
    period: tuple[date, date] | None = None
    error: str | None = None

    @property
    def status_code(self) -> int:
        """HTTP status matching the outcome."""
        return 500 if self.kind is ResultKind.ERROR else 200

    @property
    def cache_control(self) -> str:
        """Cache-Control header matching the outcome."""
        if self.kind is ResultKind.REAL:
            return "public, max-age=300"
        return "no-cache"

    def to_payload(self) -> dict[str, Any]:
        """Render the outcome as the JSON body served to the widget."""
        payload: dict[str, Any] = {
            **self.credentials.to_dict(),
            "kind": self.kind.value,
            "isMockData": self.kind is ResultKind.MOCK,
            "isRealData": self.kind is ResultKind.REAL,
            "message": self.message,
            "totals": self.totals.to_dict(),
            "countryMap": [c.to_dict() for c in self.countries],
            "series": {"timeseries": [d.to_dict() for d in self.timeseries]},
            "period": None,
        }
        if self.period is not None:
            since, until = self.period
            payload["period"] = {"since": since.isoformat(), "until": until.isoformat()}
        if self.error is not None:
            payload["error"] = self.error
        return payload
