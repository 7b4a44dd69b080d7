"""Port for endpoint-specific response decoding."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from livesearch.domain.entities.search import ResultItem


@runtime_checkable
class ResponseDecoderPort(Protocol):
    """Turns a raw response body into normalized result items.

    Raises DecodeError on malformed input. Bodies that parse but carry no
    recognizable results decode to an empty list.
    """

    def decode(self, raw: str | bytes) -> list[ResultItem]: ...
