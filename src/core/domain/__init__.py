"""Domain models for the site analytics proxy.

- analytics: queries, upstream buckets, aggregated stats and the tagged
  AnalyticsOutcome returned by the service
- exceptions: the structured exception hierarchy

Models are re-exported here for convenient importing:

    from src.core.domain import AnalyticsOutcome, ResultKind
"""

from .analytics import (
    AnalyticsOutcome,
    AnalyticsQuery,
    CountryStat,
    CountryTraffic,
    CredentialStatus,
    DailyStat,
    ResultKind,
    Totals,
    TrafficBucket,
    ZoneTraffic,
)

__all__ = [
    "AnalyticsOutcome",
    "AnalyticsQuery",
    "CountryStat",
    "CountryTraffic",
    "CredentialStatus",
    "DailyStat",
    "ResultKind",
    "Totals",
    "TrafficBucket",
    "ZoneTraffic",
]
