"""Named search sessions for long-lived consumers (HTTP API)."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Optional

import structlog

from livesearch.application.session import SearchSession
from livesearch.application.use_cases.query_executor import QueryExecutor
from livesearch.domain.ports.search_endpoint import SearchEndpointPort

log = structlog.get_logger(__name__)

EndpointResolver = Callable[[str], SearchEndpointPort]
DebounceResolver = Callable[[str], float]


class SessionNotFoundError(KeyError):
    """Raised when a session id is not known to the registry."""


class SessionRegistry:
    """Create, look up and tear down sessions by id.

    A session is bound to the endpoint it was created for; asking for the
    same id with another endpoint replaces the old session.

    With ``idle_ttl_seconds`` set, sessions not touched by ``get`` or
    ``get_or_create`` for that long are closed and forgotten. Expired
    sessions are swept whenever a session is requested.
    """

    def __init__(
        self,
        *,
        endpoint_resolver: EndpointResolver,
        debounce_resolver: DebounceResolver,
        idle_ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if idle_ttl_seconds is not None and idle_ttl_seconds <= 0:
            raise ValueError("idle_ttl_seconds must be > 0")
        self._resolve_endpoint = endpoint_resolver
        self._resolve_debounce = debounce_resolver
        self._idle_ttl = idle_ttl_seconds
        self._clock = clock
        self._sessions: dict[str, SearchSession] = {}
        self._last_used: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str) -> SearchSession:
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None
        self._touch(session_id)
        return session

    async def get_or_create(self, session_id: str, endpoint: str) -> SearchSession:
        """Return the session *session_id*, bound to *endpoint*.

        Raises:
            EndpointNotFoundError: *endpoint* is not configured.
        """
        await self.evict_idle(keep=session_id)

        existing = self._sessions.get(session_id)
        if existing is not None and existing.endpoint_name == endpoint:
            self._touch(session_id)
            return existing

        session = SearchSession(
            QueryExecutor(self._resolve_endpoint(endpoint)),
            debounce_seconds=self._resolve_debounce(endpoint),
        )
        if existing is not None:
            await existing.aclose()
        self._sessions[session_id] = session
        self._touch(session_id)
        log.info("search_session_created", session_id=session_id, endpoint=endpoint)
        return session

    async def evict_idle(self, *, keep: Optional[str] = None) -> int:
        """Close sessions idle longer than the TTL. Returns how many."""
        if self._idle_ttl is None:
            return 0
        deadline = self._clock() - self._idle_ttl
        expired = [
            sid
            for sid, used in self._last_used.items()
            if used <= deadline and sid != keep
        ]
        for sid in expired:
            session = self._sessions.pop(sid)
            del self._last_used[sid]
            await session.aclose()
        if expired:
            log.info("search_sessions_evicted", count=len(expired), remaining=len(self))
        return len(expired)

    async def close(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        self._last_used.pop(session_id, None)
        await session.aclose()

    async def close_all(self) -> None:
        sessions = list(self._sessions.values())
        self._sessions.clear()
        self._last_used.clear()
        for session in sessions:
            await session.aclose()
        if sessions:
            log.info("search_sessions_closed", count=len(sessions))

    def _touch(self, session_id: str) -> None:
        self._last_used[session_id] = self._clock()
