from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request

from livesearch import __version__
from livesearch.infrastructure.config import AppConfig
from livesearch.interfaces.app_state import AppState
from livesearch.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def build_app(config: AppConfig) -> FastAPI:
    """Build the FastAPI app: configuration only, no resource initialization.

    Resources (HTTP client, session registry, opener) are created in lifespan().
    """
    app = FastAPI(
        title="livesearch",
        description="Debounced incremental search over remote query endpoints",
        version=__version__,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from livesearch.interfaces.api.actions.router import router as actions_router
    from livesearch.interfaces.api.search.router import router as search_router

    app.include_router(search_router)
    app.include_router(actions_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
            )

    return app
