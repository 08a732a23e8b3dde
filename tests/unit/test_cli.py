"""Unit tests for the typer CLI."""

import json
from unittest.mock import patch

import pytest
from conftest import make_response
from typer.testing import CliRunner

from src.adapters.inbound.cli import commands

pytestmark = pytest.mark.unit

runner = CliRunner()


def test_summary_json_with_mock_data(unconfigured_settings):
    with patch.object(commands, "settings", unconfigured_settings):
        result = runner.invoke(commands.app, ["summary", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["isMockData"] is True
    assert payload["totals"]["pageViews"] == 12847


def test_summary_table_with_real_data(configured_settings, two_country_payload):
    with (
        patch.object(commands, "settings", configured_settings),
        patch("requests.Session.post", return_value=make_response(json_body=two_country_payload)),
    ):
        result = runner.invoke(commands.app, ["summary"])

    assert result.exit_code == 0
    assert "REAL" in result.stdout
    assert "CN" in result.stdout


def test_summary_exits_non_zero_on_upstream_failure(configured_settings):
    with (
        patch.object(commands, "settings", configured_settings),
        patch("requests.Session.post", return_value=make_response(403, text="forbidden")),
    ):
        result = runner.invoke(commands.app, ["summary"])

    assert result.exit_code == 1
    assert "ERROR" in result.stdout


def test_status_reports_mock_mode(unconfigured_settings):
    with patch.object(commands, "settings", unconfigured_settings):
        result = runner.invoke(commands.app, ["status"])

    assert result.exit_code == 0
    assert "mock data" in result.stdout
