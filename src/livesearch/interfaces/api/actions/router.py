"""Outbound "open URL" action."""

from __future__ import annotations

from typing import cast

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from livesearch.infrastructure.endpoints import build_search_url
from livesearch.interfaces.app_state import AppState

router = APIRouter(prefix="/actions", tags=["actions"])


class OpenRequest(BaseModel):
    """Either an item's own ``url``, or an ``endpoint`` + raw ``term``."""

    url: str | None = None
    endpoint: str | None = None
    term: str | None = None


# Sync handler: FastAPI runs it in a worker thread, webbrowser may block.
@router.post("/open")
def open_url(request: Request, body: OpenRequest) -> dict[str, str]:
    state = cast(AppState, request.app.state)

    if body.url:
        url = body.url
    elif body.endpoint and body.term is not None and body.term.strip():
        endpoint = state.config.endpoints.get(body.endpoint)
        if endpoint is None:
            raise HTTPException(
                status_code=404, detail=f"unknown endpoint: {body.endpoint}"
            )
        url = build_search_url(endpoint.results_url_template, body.term)
    else:
        raise HTTPException(
            status_code=400, detail="provide 'url' or 'endpoint' with a non-empty 'term'"
        )

    state.url_opener.open(url)
    return {"url": url}
