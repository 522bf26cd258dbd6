"""
Pytest configuration for the OpenData Gateway test suite.

This configuration sets up:
- Project root on sys.path
- Test markers for categorization
- Upstream doubles built on httpx.MockTransport
- A controllable clock and a recording sleep for resilience tests
"""

import sys
from pathlib import Path
from typing import Any, Callable, Union

import httpx
import pytest

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# Test Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line(
        "markers", "integration: Integration tests against the live Parliament APIs"
    )


# =============================================================================
# Upstream Double
# =============================================================================

Outcome = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeUpstream:
    """
    Scripted upstream behind httpx.MockTransport.

    Each request consumes the next scripted outcome; the last outcome repeats
    once the script runs out. An outcome is an httpx.Response, an exception
    to raise, or a callable taking the request.
    """

    def __init__(self) -> None:
        self.outcomes: list[Outcome] = []
        self.requests: list[httpx.Request] = []

    def script(self, *outcomes: Outcome) -> "FakeUpstream":
        self.outcomes = list(outcomes)
        return self

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.outcomes:
            return httpx.Response(200, json={})

        index = min(len(self.requests), len(self.outcomes)) - 1
        outcome = self.outcomes[index]

        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            # Fresh copy: a response object is bound to one request
            return httpx.Response(
                outcome.status_code, headers=outcome.headers, content=outcome.content
            )
        return outcome(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def upstream() -> FakeUpstream:
    """A scripted upstream returning {} until told otherwise."""
    return FakeUpstream()


# =============================================================================
# Time Control
# =============================================================================


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep replacement that records delays and returns at once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


# =============================================================================
# Settings and Fetcher
# =============================================================================


@pytest.fixture
def settings():
    """Settings with the production resilience defaults and no env overrides."""
    from opendata_gateway.core.config import Settings

    return Settings(_env_file=None)


@pytest.fixture
def cache(clock):
    from opendata_gateway.services.cache import ResponseCache

    return ResponseCache(clock=clock)


@pytest.fixture
def make_fetcher(upstream, cache, clock, sleep, settings):
    """Factory for fetchers wired to the scripted upstream and fake time."""
    from opendata_gateway.clients.fetcher import create_fetcher

    created = []

    def _make(name: str = "members-api", **overrides: Any):
        options = {
            "cache": cache,
            "settings": settings,
            "transport": upstream.transport,
            "sleep": sleep,
            "clock": clock,
        }
        options.update(overrides)
        fetcher = create_fetcher(name, **options)
        created.append(fetcher)
        return fetcher

    return _make


@pytest.fixture
def fetcher(make_fetcher):
    return make_fetcher()


@pytest.fixture
def toolset(upstream, cache, clock, sleep, settings):
    """Full toolset wired to the scripted upstream."""
    from opendata_gateway.tools.builtin import build_toolset

    return build_toolset(
        settings=settings,
        cache=cache,
        transport=upstream.transport,
        sleep=sleep,
        clock=clock,
    )
