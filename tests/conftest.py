"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import MagicMock

import pytest

from src.config.settings import Settings


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: HTTP contract tests against the FastAPI app")


def make_group(day, page_views=0, requests=0, uniques=0, countries=()):
    """Build one httpRequests1dGroups entry as Cloudflare returns it."""
    return {
        "dimensions": {"date": day},
        "sum": {
            "pageViews": page_views,
            "requests": requests,
            "countryMap": [
                {"clientCountryName": code, "pageViews": pv, "requests": req}
                for code, pv, req in countries
            ],
        },
        "uniq": {"uniques": uniques},
    }


def make_payload(groups):
    """Wrap groups in a GraphQL response body for a single zone."""
    return {"data": {"viewer": {"zones": [{"httpRequests1dGroups": groups}]}}, "errors": None}


def make_response(status_code=200, json_body=None, text="", json_error=None):
    """Fake ``requests.Response`` with just what the adapter reads."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_body
    return response


@pytest.fixture
def two_country_payload():
    """Two days of traffic: CN leads US on page views."""
    return make_payload(
        [
            make_group(
                "2025-03-01",
                page_views=90,
                requests=300,
                uniques=40,
                countries=[("CN", 60, 200), ("US", 30, 100)],
            ),
            make_group(
                "2025-03-02",
                page_views=60,
                requests=150,
                uniques=25,
                countries=[("CN", 40, 100), ("US", 20, 50)],
            ),
        ]
    )


@pytest.fixture
def configured_settings():
    """Settings with Cloudflare credentials and no .env lookup."""
    return Settings(_env_file=None, CF_API_TOKEN="test-token", CF_ZONE_ID="0123456789abcdef")


@pytest.fixture
def unconfigured_settings():
    """Settings without any Cloudflare credentials."""
    return Settings(_env_file=None, CF_API_TOKEN="", CF_ZONE_ID="")
