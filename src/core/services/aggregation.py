"""Aggregation of daily traffic buckets into totals and country rankings.

Unique visitors are summed across daily buckets: a visitor seen on three
different days counts three times. Cloudflare only exposes uniques per
bucket, so this is "daily unique visitors, summed" rather than distinct
people over the window.
"""

from collections.abc import Iterable

from ..domain import CountryStat, CountryTraffic, DailyStat, Totals, TrafficBucket

UNKNOWN_COUNTRY = "Unknown"

# Cloudflare codes that do not identify a country
_UNKNOWN_CODES = {"", "XX", "T1"}


def normalize_country(code: str | None) -> str:
    """Normalize an upstream country code.

    Args:
        code: Raw code such as ``"cn"``, ``"XX"`` or ``None``.

    Returns:
        Upper-cased code, or ``"Unknown"`` for missing/unidentified values.
    """
    if code is None:
        return UNKNOWN_COUNTRY
    cleaned = str(code).strip().upper()
    if cleaned in _UNKNOWN_CODES or cleaned == UNKNOWN_COUNTRY.upper():
        return UNKNOWN_COUNTRY
    return cleaned


def sum_totals(buckets: Iterable[TrafficBucket]) -> Totals:
    """Sum page views, requests and daily uniques across buckets."""
    totals = Totals()
    for bucket in buckets:
        totals.page_views += max(bucket.page_views, 0)
        totals.requests += max(bucket.requests, 0)
        totals.unique_visitors += max(bucket.unique_visitors, 0)
    return totals


def build_timeseries(buckets: Iterable[TrafficBucket]) -> list[DailyStat]:
    """Convert buckets to a date-ascending daily series."""
    series = [
        DailyStat(
            date=bucket.date,
            page_views=bucket.page_views,
            unique_visitors=bucket.unique_visitors,
            requests=bucket.requests,
        )
        for bucket in buckets
    ]
    return sorted(series, key=lambda point: point.date)


def aggregate_countries(buckets: Iterable[TrafficBucket]) -> dict[str, CountryTraffic]:
    """Merge per-bucket country rows keyed by normalized country code."""
    merged: dict[str, CountryTraffic] = {}
    for bucket in buckets:
        for row in bucket.countries:
            code = normalize_country(row.country)
            entry = merged.setdefault(code, CountryTraffic(country=code))
            entry.page_views += max(row.page_views, 0)
            entry.requests += max(row.requests, 0)
    return merged


def rank_countries(countries: dict[str, CountryTraffic], top_n: int) -> list[CountryStat]:
    """Rank countries by page views and keep the top ``top_n``.

    Rows with neither page views nor requests are dropped. Ties are broken
    by requests, then by country code, so the order is stable across calls.

    Args:
        countries: Merged traffic keyed by country code.
        top_n: Maximum number of rows to return.

    Returns:
        Ranked CountryStat rows with their share of total page views.
    """
    if top_n < 1:
        raise ValueError("top_n must be at least 1")

    rows = [c for c in countries.values() if c.page_views > 0 or c.requests > 0]
    total_page_views = sum(c.page_views for c in rows)

    rows.sort(key=lambda c: (-c.page_views, -c.requests, c.country))

    return [
        CountryStat(
            country=row.country,
            page_views=row.page_views,
            requests=row.requests,
            percentage=_percentage(row.page_views, total_page_views),
        )
        for row in rows[:top_n]
    ]


def _percentage(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round(part * 100 / whole, 1)
