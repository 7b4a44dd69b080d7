"""Port for the outbound "open URL" action."""

from __future__ import annotations

from typing import Protocol


class UrlOpenerPort(Protocol):
    """Fire-and-forget opener; must never raise into the caller."""

    def open(self, url: str) -> None: ...
