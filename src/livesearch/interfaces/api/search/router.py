"""Session endpoints: push raw input, read the current SearchState."""

from __future__ import annotations

from typing import Any, cast

from fastapi import APIRouter, HTTPException, Query, Request, Response
from pydantic import BaseModel, Field

from livesearch.application.session import SearchSession
from livesearch.application.session_registry import SessionNotFoundError
from livesearch.domain.entities import EndpointNotFoundError
from livesearch.interfaces.app_state import AppState

router = APIRouter(tags=["search"])


class QueryUpdate(BaseModel):
    endpoint: str = Field(description="Configured endpoint name, e.g. 'github'.")
    text: str = Field(description="Raw, undebounced input value.")


def _render(session_id: str, session: SearchSession) -> dict[str, Any]:
    return {
        "session_id": session_id,
        "endpoint": session.endpoint_name,
        "text": session.text,
        **session.state.to_dict(),
    }


@router.get("/endpoints")
async def list_endpoints(request: Request) -> dict[str, Any]:
    state = cast(AppState, request.app.state)
    config = state.config
    return {
        "endpoints": [
            {
                "name": name,
                "kind": endpoint.kind,
                "debounce_ms": round(config.debounce_seconds_for(name) * 1000),
            }
            for name, endpoint in sorted(config.endpoints.items())
        ]
    }


@router.put("/sessions/{session_id}/query")
async def set_query(
    request: Request,
    session_id: str,
    update: QueryUpdate,
    wait: bool = Query(
        default=False, description="Block until the query has settled and resolved."
    ),
) -> dict[str, Any]:
    state = cast(AppState, request.app.state)
    try:
        session = await state.sessions.get_or_create(session_id, update.endpoint)
    except EndpointNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"unknown endpoint: {exc}") from exc

    session.set_query(update.text)
    if wait:
        await session.wait_idle()
    return _render(session_id, session)


@router.get("/sessions/{session_id}")
async def get_session(request: Request, session_id: str) -> dict[str, Any]:
    state = cast(AppState, request.app.state)
    try:
        session = state.sessions.get(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="unknown session") from exc
    return _render(session_id, session)


@router.delete("/sessions/{session_id}", status_code=204)
async def close_session(request: Request, session_id: str) -> Response:
    state = cast(AppState, request.app.state)
    try:
        await state.sessions.close(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="unknown session") from exc
    return Response(status_code=204)
