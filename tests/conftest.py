"""Shared test fixtures for the livesearch test suite."""

from __future__ import annotations

import asyncio

import pytest

from livesearch.domain.entities import ResultItem

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def result_item() -> ResultItem:
    """Minimal repository-style ResultItem."""
    return ResultItem(
        id="1",
        title="encode/httpx",
        url="https://github.com/encode/httpx",
        subtitle="A next generation HTTP client for Python.",
        accessories=("Python", "★ 13,000"),
        metadata={"language": "Python", "stars": 13000},
    )


# ---------------------------------------------------------------------------
# Fake endpoint (SearchEndpointPort)
# ---------------------------------------------------------------------------


class FakeEndpoint:
    """Scriptable endpoint: canned results per query, optional hold gates."""

    def __init__(self, name: str = "fake") -> None:
        self.name = name
        self.calls: list[str] = []
        self._responses: dict[str, list[ResultItem] | Exception] = {}
        self._gates: dict[str, asyncio.Event] = {}

    def respond(self, query: str, result: list[ResultItem] | Exception) -> None:
        self._responses[query] = result

    def hold(self, query: str) -> asyncio.Event:
        """Block searches for *query* until the returned event is set."""
        gate = asyncio.Event()
        self._gates[query] = gate
        return gate

    async def search(self, query: str) -> list[ResultItem]:
        self.calls.append(query)
        gate = self._gates.get(query)
        if gate is not None:
            await gate.wait()
        result = self._responses.get(query, [])
        if isinstance(result, Exception):
            raise result
        return list(result)

    def results_url(self, term: str) -> str:
        return f"https://fake.example/search?q={term}"


@pytest.fixture()
def fake_endpoint() -> FakeEndpoint:
    return FakeEndpoint()


@pytest.fixture()
def fake_endpoint_factory() -> type[FakeEndpoint]:
    """The FakeEndpoint class, for tests that need several endpoints."""
    return FakeEndpoint
