"""Shared fixtures and utilities for gameapi tests.

This module provides:
- A fixed client configuration pointing at a fake backend
- Helpers for building httpx mock transports
- Custom markers for test categorization
"""

from collections.abc import Callable

import httpx
import pytest

from gameapi.config import ClientConfig

TEST_BASE_URL = "http://test.invalid/api/"
PLACEHOLDER = "placeholder-token"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers", "concurrency: marks tests exercising interleaved completions"
    )


@pytest.fixture
def client_config() -> ClientConfig:
    """Provide a configuration with a recognisable placeholder credential.

    Returns:
        A ClientConfig for the fake backend.
    """
    return ClientConfig(
        base_url=TEST_BASE_URL,
        client_agent="Test-Agent",
        initial_credential=PLACEHOLDER,
        timeout=5.0,
    )


def json_transport(
    status_code: int,
    body: object,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Build a transport that answers every request with the same JSON body.

    Args:
        status_code: HTTP status to return.
        body: JSON-serialisable body, or a str sent verbatim.
        seen: Optional list collecting the requests the transport received.

    Returns:
        An httpx.MockTransport.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body)

    return httpx.MockTransport(handler)


def failing_transport(
    exc_factory: Callable[[httpx.Request], Exception] | None = None,
) -> httpx.MockTransport:
    """Build a transport whose every exchange fails before a response arrives."""

    def handler(request: httpx.Request) -> httpx.Response:
        if exc_factory is not None:
            raise exc_factory(request)
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)
