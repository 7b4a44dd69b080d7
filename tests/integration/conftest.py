"""Shared fixtures for integration tests.

These tests wire real infrastructure components (HttpxSearchEndpoint,
decoders, SearchSession) together with mocked HTTP via respx.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import httpx
import pytest
import respx

from livesearch.infrastructure.config import AppConfig


@pytest.fixture()
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Real httpx.AsyncClient for use with respx mocking."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def respx_mock() -> Iterator[respx.MockRouter]:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def app_config() -> AppConfig:
    """Default config with short quiet periods so tests settle fast."""
    config = AppConfig(environment="test", debounce_ms=20)
    for endpoint in config.endpoints.values():
        endpoint.debounce_ms = 20
    return config
