"""
Tests for the exception hierarchy.
"""

import pytest


class TestUpstreamErrors:
    """Tests for upstream error types."""

    def test_status_error_message(self) -> None:
        from opendata_gateway.core.exceptions import ErrorCode, UpstreamStatusError

        error = UpstreamStatusError(503, "Service Unavailable")

        assert error.message == "HTTP request failed with status 503: Service Unavailable"
        assert str(error) == error.message
        assert error.status_code == 503
        assert error.error_code == ErrorCode.UPSTREAM_STATUS_ERROR

    def test_permanent_error_message(self) -> None:
        from opendata_gateway.core.exceptions import PermanentUpstreamError

        error = PermanentUpstreamError(404, "Not Found")

        assert error.message == "HTTP request failed with status 404: Not Found"
        assert error.reason == "Not Found"

    def test_timeout_error(self) -> None:
        from opendata_gateway.core.exceptions import ErrorCode, UpstreamTimeoutError

        error = UpstreamTimeoutError()

        assert error.message == "Request timed out after multiple attempts"
        assert error.status_code is None
        assert error.error_code == ErrorCode.UPSTREAM_TIMEOUT

    def test_connection_error(self) -> None:
        from opendata_gateway.core.exceptions import UpstreamConnectionError

        error = UpstreamConnectionError("connection refused")

        assert error.message == "Network error: connection refused"
        assert error.detail == "connection refused"

    @pytest.mark.parametrize(
        "error_class, args",
        [
            ("UpstreamStatusError", (500,)),
            ("UpstreamTimeoutError", ()),
            ("UpstreamConnectionError", ("reset",)),
        ],
    )
    def test_transient_family(self, error_class: str, args: tuple) -> None:
        from opendata_gateway.core import exceptions

        error = getattr(exceptions, error_class)(*args)

        assert isinstance(error, exceptions.TransientUpstreamError)
        assert isinstance(error, exceptions.UpstreamError)

    def test_permanent_is_not_transient(self) -> None:
        from opendata_gateway.core.exceptions import (
            PermanentUpstreamError,
            TransientUpstreamError,
            UpstreamError,
        )

        error = PermanentUpstreamError(400)

        assert isinstance(error, UpstreamError)
        assert not isinstance(error, TransientUpstreamError)


class TestToolErrors:
    """Tests for tool error types."""

    def test_validation_error_fields(self) -> None:
        from opendata_gateway.core.exceptions import (
            ErrorCode,
            OpenDataGatewayException,
            ToolValidationError,
        )

        error = ToolValidationError("bad", tool_name="get_member", field="member_id")

        assert isinstance(error, OpenDataGatewayException)
        assert error.tool_name == "get_member"
        assert error.field == "member_id"
        assert error.error_code == ErrorCode.VALIDATION_ERROR

    def test_extra_attributes(self) -> None:
        from opendata_gateway.core.exceptions import OpenDataGatewayException

        error = OpenDataGatewayException("oops", upstream="bills-api")

        assert error.upstream == "bills-api"
