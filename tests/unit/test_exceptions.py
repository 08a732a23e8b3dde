"""Unit tests for the exception hierarchy and handler utilities."""

import json

import pytest

from src.common.exception_handler import (
    format_exception_json,
    get_http_status_code,
)
from src.core.domain.exceptions import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingCredentialsError,
    SiteAnalyticsError,
    UpstreamConnectionError,
    UpstreamError,
    UpstreamGraphQLError,
    UpstreamHTTPError,
    UpstreamResponseError,
)

# Apply @pytest.mark.unit to all tests in this module
pytestmark = pytest.mark.unit


class TestExceptionHierarchy:
    """Tests for the exception class hierarchy."""

    def test_site_analytics_error_is_base(self):
        assert issubclass(ConfigurationError, SiteAnalyticsError)
        assert issubclass(UpstreamError, SiteAnalyticsError)

    def test_config_errors_inherit_from_configuration(self):
        assert issubclass(MissingCredentialsError, ConfigurationError)
        assert issubclass(InvalidConfigurationError, ConfigurationError)

    def test_each_exception_has_unique_error_code(self):
        exceptions = [
            SiteAnalyticsError("test"),
            ConfigurationError("test"),
            MissingCredentialsError("test"),
            InvalidConfigurationError("test"),
            UpstreamError("test"),
            UpstreamConnectionError("test"),
            UpstreamHTTPError("test"),
            UpstreamResponseError("test"),
            UpstreamGraphQLError("test"),
        ]
        codes = {exc.error_code for exc in exceptions}
        assert len(codes) == len(exceptions)


class TestExceptionCreation:
    """Tests for creating and using exceptions."""

    def test_basic_exception(self):
        exc = SiteAnalyticsError("Test error message")
        assert str(exc) == "Test error message"
        assert exc.message == "Test error message"
        assert exc.error_code == "SA_ERR_001"

    def test_exception_with_context_and_cause(self):
        original = ConnectionError("Network unreachable")
        exc = UpstreamConnectionError(
            "Could not reach analytics API", cause=original, context={"url": "https://x"}
        )
        assert exc.cause is original
        assert exc.extra_context["url"] == "https://x"

    def test_exception_captures_location(self):
        exc = UpstreamHTTPError("Test")
        assert exc.location.method_name == "test_exception_captures_location"
        assert exc.location.file_name == "test_exceptions.py"
        assert exc.location.line_number > 0


class TestExceptionToDict:
    """Tests for exception JSON serialization."""

    def test_to_dict_structure(self):
        exc = UpstreamHTTPError("API error 403", context={"status": 403})
        result = exc.to_dict()

        assert result["error"] == {
            "type": "UpstreamHTTPError",
            "code": "SA_UPS_003",
            "message": "API error 403",
        }
        assert result["context"] == {"status": 403}
        assert "location" in result
        assert "stack_trace" not in result
        json.dumps(result)

    def test_to_dict_includes_cause(self):
        exc = UpstreamResponseError("Bad JSON", cause=ValueError("Expecting value"))
        assert exc.to_dict()["cause"] == {"type": "ValueError", "message": "Expecting value"}

    def test_trace_comes_from_cause(self):
        def parse():
            raise ValueError("Expecting value")

        try:
            parse()
        except ValueError as e:
            exc = UpstreamResponseError("Bad JSON", cause=e)

        trace = exc.to_dict(include_trace=True)["stack_trace"]
        assert any("in parse" in line for line in trace)
        assert trace[-1] == "ValueError: Expecting value"

    def test_no_trace_without_cause(self):
        exc = UpstreamHTTPError("API error 500")
        assert exc.stack_trace == []
        assert "stack_trace" not in exc.to_dict(include_trace=True)

    def test_location_names_calling_method(self):
        class Client:
            def fetch(self):
                return UpstreamHTTPError("API error 403")

        location = Client().fetch().location
        assert location.class_name == "Client"
        assert location.method_name == "fetch"


class TestExceptionHandler:
    """Tests for formatting and status mapping."""

    def test_format_standard_exception(self):
        try:
            raise ValueError("boom")
        except ValueError as e:
            result = format_exception_json(e, include_trace=True)

        assert result["error"]["code"] == "PYTHON_ERR"
        assert result["error"]["type"] == "ValueError"
        assert result["location"]["method"] == "test_format_standard_exception"
        assert result["stack_trace"]

    def test_format_custom_exception_merges_context(self):
        exc = UpstreamHTTPError("API error", context={"status": 500})
        result = format_exception_json(exc, extra_context={"path": "/api/analytics"})
        assert result["context"] == {"status": 500, "path": "/api/analytics"}
        assert exc.extra_context == {"status": 500}

    @pytest.mark.parametrize(
        ("exc", "status"),
        [
            (UpstreamConnectionError("x"), 503),
            (UpstreamHTTPError("x"), 502),
            (UpstreamGraphQLError("x"), 502),
            (MissingCredentialsError("x"), 500),
            (SiteAnalyticsError("x"), 500),
            (TimeoutError("x"), 503),
            (RuntimeError("x"), 500),
        ],
    )
    def test_http_status_mapping(self, exc, status):
        assert get_http_status_code(exc) == status
