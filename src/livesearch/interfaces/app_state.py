"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

import httpx
from starlette.datastructures import State

from livesearch.application.session_registry import SessionRegistry
from livesearch.domain.ports import UrlOpenerPort
from livesearch.infrastructure.config import AppConfig


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient
    url_opener: UrlOpenerPort

    # Application Services
    sessions: SessionRegistry
