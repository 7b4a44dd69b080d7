"""Decoder for padded pseudo-JSON suggestion feeds.

The feed answers with ``window.google.ac.h(<json>)`` (optionally followed
by ``;``). The interior is an array whose second element lists the
suggestions, each either a bare string or an array led by a string::

    window.google.ac.h(["query", ["a", ["b", 0, [512]]], {...}])
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import structlog

from livesearch.domain.entities.search import DecodeError, ResultItem, ShapeMismatch

log = structlog.get_logger(__name__)

DEFAULT_PREFIX = "window.google.ac.h("


def _unwrap(text: str, prefix: str) -> str:
    suffix = ");" if text.endswith(");") else ")"
    if not text.startswith(prefix) or not text.endswith(suffix):
        raise DecodeError("Unexpected suggestion response format")
    return text[len(prefix) : len(text) - len(suffix)]


def _suggestion_entries(data: Any) -> list[Any]:
    if not isinstance(data, list) or len(data) < 2 or not isinstance(data[1], list):
        raise ShapeMismatch("expected [query, [suggestions, ...], ...]")
    return data[1]


def _entry_text(entry: Any) -> str | None:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, list) and entry and isinstance(entry[0], str):
        return entry[0]
    return None


class PaddedJsonDecoder:
    """Strictly validates the wrapper, permissively reads the payload."""

    def __init__(
        self,
        *,
        results_url: Callable[[str], str],
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._results_url = results_url
        self._prefix = prefix

    def parse_suggestions(self, raw: str | bytes) -> list[str]:
        """Return the suggestion strings in feed order."""
        if isinstance(raw, bytes):
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise DecodeError("Failed to parse suggestion response") from exc
        else:
            text = raw
        payload = _unwrap(text.strip(), self._prefix)

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise DecodeError("Failed to parse suggestion response") from exc

        try:
            entries = _suggestion_entries(data)
        except ShapeMismatch as exc:
            log.debug("padded_json_shape_mismatch", reason=str(exc))
            return []

        suggestions: list[str] = []
        for entry in entries:
            text_value = _entry_text(entry)
            if text_value:
                suggestions.append(text_value)
        return suggestions

    def decode(self, raw: str | bytes) -> list[ResultItem]:
        return [
            ResultItem(id=suggestion, title=suggestion, url=self._results_url(suggestion))
            for suggestion in self.parse_suggestions(raw)
        ]
