"""Port for a remote search endpoint."""

from __future__ import annotations

from typing import Protocol

from livesearch.domain.entities.search import ResultItem


class SearchEndpointPort(Protocol):
    """Async interface for one remote query endpoint."""

    name: str

    async def search(self, query: str) -> list[ResultItem]:
        """Fetch and decode results for *query*.

        Raises NetworkError or DecodeError on failure.
        """
        ...

    def results_url(self, term: str) -> str:
        """URL of the endpoint's own results page for *term*."""
        ...
