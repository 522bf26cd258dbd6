"""
Tests for the response normalizer.

This module tests:
- 2xx bodies: JSON, non-JSON (RSS/XML), empty and JSON null
- Non-2xx status responses
- Mapping of typed faults to user-visible messages
"""

import httpx
import pytest

URL = "https://members-api.parliament.uk/api/Members/172"


class TestParseJsonBody:
    """Tests for parse_json_body()."""

    @pytest.mark.parametrize("body", ["", "   ", "\n\t"])
    def test_blank_is_none(self, body: str) -> None:
        from opendata_gateway.services.normalizer import parse_json_body

        assert parse_json_body(body) is None

    def test_json_object(self) -> None:
        from opendata_gateway.services.normalizer import parse_json_body

        assert parse_json_body('{"value": 42}') == {"value": 42}

    def test_json_array(self) -> None:
        from opendata_gateway.services.normalizer import parse_json_body

        assert parse_json_body("[1, 2]") == [1, 2]

    def test_xml_is_none(self) -> None:
        from opendata_gateway.services.normalizer import parse_json_body

        assert parse_json_body("<rss></rss>") is None

    def test_json_null_is_none(self) -> None:
        from opendata_gateway.services.normalizer import parse_json_body

        assert parse_json_body("null") is None

    def test_too_deeply_nested_is_none(self) -> None:
        from opendata_gateway.services.normalizer import parse_json_body

        assert parse_json_body("[" * 100000) is None


class TestNormalizeResponse:
    """Tests for normalize_response()."""

    def test_json_success(self) -> None:
        from opendata_gateway.services.normalizer import normalize_response

        response = normalize_response(URL, httpx.Response(200, text='{"value":42}'))

        assert response.success is True
        assert response.url == URL
        assert response.raw_content == '{"value":42}'
        assert response.parsed_json == {"value": 42}

    def test_rss_success_keeps_raw(self) -> None:
        from opendata_gateway.services.normalizer import normalize_response

        response = normalize_response(URL, httpx.Response(200, text="<rss></rss>"))

        assert response.success is True
        assert response.raw_content == "<rss></rss>"
        assert response.parsed_json is None

    def test_undecodable_nesting_is_raw_success(self) -> None:
        from opendata_gateway.services.normalizer import normalize_response

        body = "[" * 100000
        response = normalize_response(URL, httpx.Response(200, text=body))

        assert response.success is True
        assert response.raw_content == body
        assert response.parsed_json is None

    def test_empty_body_success(self) -> None:
        from opendata_gateway.services.normalizer import normalize_response

        response = normalize_response(URL, httpx.Response(204))

        assert response.success is True
        assert response.raw_content == ""
        assert response.parsed_json is None

    def test_non_success_status(self) -> None:
        from opendata_gateway.services.normalizer import normalize_response

        response = normalize_response(URL, httpx.Response(404, text="missing"))

        assert response.success is False
        assert response.status_code == 404
        assert response.error == "HTTP request failed with status 404: Not Found"
        assert response.raw_content is None


class TestNormalizeException:
    """Tests for normalize_exception()."""

    def test_circuit_open(self) -> None:
        from opendata_gateway.resilience.circuit_breaker_state_machine import CircuitBreakerError
        from opendata_gateway.services.normalizer import normalize_exception

        response = normalize_exception(URL, CircuitBreakerError("members-api"))

        assert response.error == "Service temporarily unavailable (circuit breaker open)"
        assert response.status_code is None

    def test_retryable_status_exhausted(self) -> None:
        from opendata_gateway.core.exceptions import UpstreamStatusError
        from opendata_gateway.services.normalizer import normalize_exception

        response = normalize_exception(URL, UpstreamStatusError(503, "Service Unavailable"))

        assert response.error == "HTTP request failed with status 503: Service Unavailable"
        assert response.status_code == 503

    def test_permanent_status(self) -> None:
        from opendata_gateway.core.exceptions import PermanentUpstreamError
        from opendata_gateway.services.normalizer import normalize_exception

        response = normalize_exception(URL, PermanentUpstreamError(400, "Bad Request"))

        assert response.error == "HTTP request failed with status 400: Bad Request"
        assert response.status_code == 400

    def test_timeout(self) -> None:
        from opendata_gateway.core.exceptions import UpstreamTimeoutError
        from opendata_gateway.services.normalizer import normalize_exception

        response = normalize_exception(URL, UpstreamTimeoutError())

        assert response.error == "Request timed out after multiple attempts"
        assert response.status_code is None

    def test_network(self) -> None:
        from opendata_gateway.core.exceptions import UpstreamConnectionError
        from opendata_gateway.services.normalizer import normalize_exception

        response = normalize_exception(URL, UpstreamConnectionError("connection refused"))

        assert response.error == "Network error: connection refused"

    def test_unexpected(self) -> None:
        from opendata_gateway.services.normalizer import normalize_exception

        response = normalize_exception(URL, RuntimeError("kaput"))

        assert response.error == "Unexpected error: kaput"
        assert response.success is False
