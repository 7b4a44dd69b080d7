"""Core search entities: result items, request handles, session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ResultItem:
    """Normalized, display-ready search result produced by a decoder."""

    id: str
    title: str
    url: str  # Target opened by the outbound action
    subtitle: str | None = None

    # Short right-aligned labels, e.g. ("Go", "★ 1,234")
    accessories: tuple[str, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "subtitle": self.subtitle,
            "accessories": list(self.accessories),
            "metadata": dict(self.metadata),
        }


@dataclass
class RequestHandle:
    """One issued remote call for a settled query.

    Only the executor's active handle may commit results. Issuing a new
    handle cancels the previous one; the network call it started is left
    to finish and its outcome is discarded.
    """

    query: str
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(frozen=True)
class SearchState:
    """Externally observable snapshot of one search session."""

    query: str = ""
    items: tuple[ResultItem, ...] = ()
    is_loading: bool = False
    error: Exception | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "items": [item.to_dict() for item in self.items],
            "is_loading": self.is_loading,
            "error": str(self.error) if self.error is not None else None,
        }


class SearchError(Exception):
    """Base error for the search pipeline."""


class NetworkError(SearchError):
    """Transport failure or non-success HTTP status from an endpoint."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(SearchError):
    """Response body could not be unwrapped or parsed."""


class ShapeMismatch(SearchError):
    """Body parsed but lacks the expected fields.

    Decoders absorb this into an empty result; it never reaches SearchState.
    """


class EndpointNotFoundError(SearchError):
    """Raised when an endpoint name is not configured."""
