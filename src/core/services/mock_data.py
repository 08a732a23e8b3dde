"""Fixed demonstration dataset served when no credentials are configured."""

from ..domain import CountryTraffic, Totals
from .aggregation import rank_countries

MOCK_MESSAGE = "Using mock data. Configure CF_API_TOKEN and CF_ZONE_ID for real data."

MOCK_TOTALS = {"page_views": 12847, "unique_visitors": 4823, "requests": 35621}

# (country, page views, requests); page views are the published demo figures,
# request counts are illustrative
MOCK_COUNTRIES = [
    ("CN", 5234, 14512),
    ("US", 2847, 7893),
    ("AU", 1523, 4219),
    ("JP", 982, 2731),
    ("GB", 756, 2104),
    ("DE", 505, 1402),
]


def mock_totals() -> Totals:
    """Fresh Totals for the demo dataset."""
    return Totals(**MOCK_TOTALS)


def mock_countries(top_n: int = len(MOCK_COUNTRIES)):
    """Ranked country rows for the demo dataset."""
    merged = {
        code: CountryTraffic(country=code, page_views=page_views, requests=requests)
        for code, page_views, requests in MOCK_COUNTRIES
    }
    return rank_countries(merged, top_n)
