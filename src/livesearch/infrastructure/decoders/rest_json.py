"""Decoder for JSON REST search payloads (GitHub repository search shape)."""

from __future__ import annotations

import json
from typing import Any

import structlog

from livesearch.domain.entities.search import DecodeError, ResultItem, ShapeMismatch

log = structlog.get_logger(__name__)

_STAR = "★"


def format_stars(count: int) -> str:
    """Render a stargazer count as ``★ 1,234``."""
    return f"{_STAR} {count:,}"


class RestJsonDecoder:
    """Decode ``{"items": [...]}`` bodies into ResultItems.

    Permissive about the outer shell: a body that is not an object, or an
    ``items`` field that is missing or not a list, means "no results".
    Only an unparsable body is an error. Entries that are not objects or
    carry a non-numeric star count are dropped.
    """

    def decode(self, raw: str | bytes) -> list[ResultItem]:
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DecodeError("Failed to parse search response") from exc

        try:
            entries = self._extract_items(data)
        except ShapeMismatch as exc:
            log.debug("rest_json_shape_mismatch", reason=str(exc))
            return []

        items: list[ResultItem] = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            item = self._to_item(entry)
            if item is not None:
                items.append(item)
        return items

    @staticmethod
    def _extract_items(data: Any) -> list[Any]:
        if not isinstance(data, dict):
            raise ShapeMismatch(f"expected object, got {type(data).__name__}")
        items = data.get("items")
        if not isinstance(items, list):
            raise ShapeMismatch("'items' missing or not a list")
        return items

    @staticmethod
    def _to_item(entry: dict[str, Any]) -> ResultItem | None:
        full_name = str(entry.get("full_name") or "")
        language = entry.get("language") or None
        raw_stars = entry.get("stargazers_count")
        try:
            stars = int(raw_stars or 0)
        except (TypeError, ValueError, OverflowError):
            log.debug("rest_json_entry_dropped", full_name=full_name, stars=raw_stars)
            return None

        accessories: list[str] = []
        if language:
            accessories.append(str(language))
        accessories.append(format_stars(stars))

        entry_id = entry.get("id")
        return ResultItem(
            id=str(entry_id) if entry_id is not None else full_name,
            title=full_name,
            url=str(entry.get("html_url") or ""),
            subtitle=entry.get("description"),
            accessories=tuple(accessories),
            metadata={"language": language, "stars": stars},
        )
