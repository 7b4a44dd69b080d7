"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "livesearch",
    "environment": "dev",
    "http": {
        "timeout_seconds": 30.0,
        "follow_redirects": True,
        "user_agent": "livesearch/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "search": {
        "debounce_ms": 300,
        "open_with": None,
        "session_ttl_seconds": 900.0,
    },
    "endpoints": {
        "github": {
            "kind": "rest_json",
            "search_url": "https://api.github.com/search/repositories",
            "params": {"per_page": "10"},
            "error_label": "GitHub search",
            "results_url_template": "https://github.com/search?type=repositories&q={query}",
        },
        "youtube": {
            "kind": "padded_json",
            "search_url": "https://suggestqueries.google.com/complete/search",
            "params": {"client": "youtube", "ds": "yt"},
            "error_label": "Suggestion request",
            "results_url_template": "https://www.youtube.com/results?search_query={query}",
            "debounce_ms": 250,
        },
    },
}
