from __future__ import annotations

from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncIterator, cast

import structlog
from fastapi import FastAPI

from livesearch.application.session_registry import SessionRegistry
from livesearch.infrastructure.actions import WebbrowserUrlOpener
from livesearch.infrastructure.endpoints import create_endpoint, create_http_client
from livesearch.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP Client (shared by every endpoint)
        2. Session Registry (builds endpoints on the shared client)
        3. URL opener (stateless)
    """
    state = cast(AppState, app.state)
    config = state.config

    state.http_client = create_http_client(config)
    log.info(
        "http_client_initialized",
        timeout=config.http_timeout_seconds,
        user_agent=config.http_user_agent,
    )

    state.sessions = SessionRegistry(
        endpoint_resolver=partial(
            create_endpoint, config=config, http_client=state.http_client
        ),
        debounce_resolver=config.debounce_seconds_for,
        idle_ttl_seconds=config.session_ttl_seconds,
    )
    state.url_opener = WebbrowserUrlOpener(config.open_with)
    log.info("app_started", endpoints=sorted(config.endpoints))

    try:
        yield
    finally:
        await state.sessions.close_all()
        await state.http_client.aclose()
        log.info("app_shutdown")
