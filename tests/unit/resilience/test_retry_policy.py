"""
Tests for RetryPolicy.

This module tests:
- Transient classification (timeouts, network faults, 408/429/5xx)
- Immediate PermanentUpstreamError for other non-2xx statuses
- Exponential backoff schedule
- Typed error of the last attempt after exhaustion
- Per-attempt timeout
"""

import asyncio

import httpx
import pytest

URL = "https://bills-api.parliament.uk/api/v1/BillTypes"


@pytest.fixture
def policy(sleep):
    from opendata_gateway.resilience.retry import RetryPolicy

    return RetryPolicy(name="bills-api", sleep=sleep)


async def run(policy, upstream):
    async with httpx.AsyncClient(transport=upstream.transport) as client:
        return await policy.execute(lambda: client.get(URL), URL)


class TestClassification:
    """Tests for is_transient_status()."""

    @pytest.mark.parametrize("status_code", [408, 429, 500, 502, 503, 504])
    def test_transient(self, status_code: int) -> None:
        from opendata_gateway.resilience.retry import is_transient_status

        assert is_transient_status(status_code) is True

    @pytest.mark.parametrize("status_code", [400, 401, 403, 404, 409, 501])
    def test_not_transient(self, status_code: int) -> None:
        from opendata_gateway.resilience.retry import is_transient_status

        assert is_transient_status(status_code) is False


class TestBackoff:
    """Tests for delay_for_retry()."""

    def test_default_schedule(self, policy) -> None:
        assert policy.delay_for_retry(1) == pytest.approx(0.2)
        assert policy.delay_for_retry(2) == pytest.approx(0.4)

    def test_defaults(self, policy) -> None:
        assert policy.max_attempts == 3
        assert policy.attempt_timeout_seconds == 30.0

    def test_rejects_zero_attempts(self) -> None:
        from opendata_gateway.resilience.retry import RetryPolicy

        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)


class TestExecute:
    """Tests for RetryPolicy.execute()."""

    @pytest.mark.asyncio
    async def test_first_attempt_success(self, policy, upstream, sleep) -> None:
        upstream.script(httpx.Response(200, text="ok"))

        response = await run(policy, upstream)

        assert response.status_code == 200
        assert upstream.calls == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failures", [1, 2])
    async def test_success_after_transient_failures(
        self, policy, upstream, sleep, failures: int
    ) -> None:
        upstream.script(*([httpx.Response(503)] * failures), httpx.Response(200, text="ok"))

        response = await run(policy, upstream)

        assert response.status_code == 200
        assert upstream.calls == failures + 1
        assert sleep.delays == pytest.approx([0.2, 0.4][:failures])

    @pytest.mark.asyncio
    async def test_exhaustion_raises_last_status(self, policy, upstream, sleep) -> None:
        from opendata_gateway.core.exceptions import UpstreamStatusError

        upstream.script(httpx.Response(500), httpx.Response(502), httpx.Response(503))

        with pytest.raises(UpstreamStatusError) as exc_info:
            await run(policy, upstream)

        assert exc_info.value.status_code == 503
        assert exc_info.value.message == "HTTP request failed with status 503: Service Unavailable"
        assert upstream.calls == 3
        assert sleep.delays == pytest.approx([0.2, 0.4])

    @pytest.mark.asyncio
    async def test_never_more_than_max_attempts(self, policy, upstream) -> None:
        from opendata_gateway.core.exceptions import TransientUpstreamError

        upstream.script(httpx.Response(429))

        with pytest.raises(TransientUpstreamError):
            await run(policy, upstream)

        assert upstream.calls == 3

    @pytest.mark.asyncio
    async def test_permanent_status_not_retried(self, policy, upstream, sleep) -> None:
        from opendata_gateway.core.exceptions import PermanentUpstreamError

        upstream.script(httpx.Response(404), httpx.Response(200))

        with pytest.raises(PermanentUpstreamError) as exc_info:
            await run(policy, upstream)

        assert exc_info.value.status_code == 404
        assert upstream.calls == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_timeout_exhaustion(self, policy, upstream) -> None:
        from opendata_gateway.core.exceptions import UpstreamTimeoutError

        upstream.script(httpx.ReadTimeout("read timed out"))

        with pytest.raises(UpstreamTimeoutError) as exc_info:
            await run(policy, upstream)

        assert exc_info.value.message == "Request timed out after multiple attempts"
        assert upstream.calls == 3

    @pytest.mark.asyncio
    async def test_network_exhaustion(self, policy, upstream) -> None:
        from opendata_gateway.core.exceptions import UpstreamConnectionError

        upstream.script(httpx.ConnectError("connection refused"))

        with pytest.raises(UpstreamConnectionError) as exc_info:
            await run(policy, upstream)

        assert exc_info.value.message == "Network error: connection refused"
        assert upstream.calls == 3

    @pytest.mark.asyncio
    async def test_single_attempt_raises_without_sleeping(self, upstream, sleep) -> None:
        from opendata_gateway.core.exceptions import UpstreamStatusError
        from opendata_gateway.resilience.retry import RetryPolicy

        policy = RetryPolicy(name="bills-api", max_attempts=1, sleep=sleep)
        upstream.script(httpx.Response(502))

        with pytest.raises(UpstreamStatusError) as exc_info:
            await run(policy, upstream)

        assert exc_info.value.status_code == 502
        assert upstream.calls == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_last_attempt_kind_wins(self, policy, upstream) -> None:
        from opendata_gateway.core.exceptions import UpstreamConnectionError

        upstream.script(
            httpx.Response(503),
            httpx.ReadTimeout("slow"),
            httpx.ConnectError("reset"),
        )

        with pytest.raises(UpstreamConnectionError):
            await run(policy, upstream)

    @pytest.mark.asyncio
    async def test_per_attempt_timeout(self, sleep) -> None:
        from opendata_gateway.core.exceptions import UpstreamTimeoutError
        from opendata_gateway.resilience.retry import RetryPolicy

        policy = RetryPolicy(name="slow", attempt_timeout_seconds=0.01, sleep=sleep)
        attempts = 0

        async def hang() -> httpx.Response:
            nonlocal attempts
            attempts += 1
            await asyncio.sleep(10)
            return httpx.Response(200)

        with pytest.raises(UpstreamTimeoutError):
            await policy.execute(hang, URL)

        assert attempts == 3
        assert sleep.delays == pytest.approx([0.2, 0.4])

    @pytest.mark.asyncio
    async def test_from_settings(self, settings, upstream, sleep) -> None:
        from opendata_gateway.core.exceptions import UpstreamStatusError
        from opendata_gateway.resilience.retry import RetryPolicy

        settings = settings.model_copy(update={"retry_max_attempts": 2})
        policy = RetryPolicy.from_settings("bills-api", settings, sleep=sleep)
        upstream.script(httpx.Response(500))

        with pytest.raises(UpstreamStatusError):
            await run(policy, upstream)

        assert upstream.calls == 2
