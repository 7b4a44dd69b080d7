"""Latest-wins query execution with stale-while-revalidate state."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

import structlog

from livesearch.domain.entities import RequestHandle, SearchState
from livesearch.domain.ports.search_endpoint import SearchEndpointPort

log = structlog.get_logger(__name__)

StateListener = Callable[[SearchState], None]


class QueryExecutor:
    """Runs settled queries against one endpoint and owns the SearchState.

    Flow per settled query:
        1. ``issue()`` cancels the active handle and makes a new one active
        2. Blank query: empty state, no network call
        3. Otherwise: mark loading, keep previous items visible
        4. ``run()`` awaits the endpoint; only the still-active handle
           commits success (items) or failure (error, items kept)

    Results of superseded handles are computed but never committed, so the
    visible state always belongs to the most recently issued query.
    """

    def __init__(self, endpoint: SearchEndpointPort) -> None:
        self.endpoint = endpoint
        self._state = SearchState()
        self._active: RequestHandle | None = None
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SearchState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call *listener* with every committed state. Returns an unsubscriber."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def issue(self, query: str) -> RequestHandle:
        """Make a handle for *query* active and publish the loading state.

        Synchronous, so the caller fixes the order of settled queries.
        """
        if self._active is not None:
            self._active.cancel()
        handle = RequestHandle(query=query)
        self._active = handle

        if not query.strip():
            self._commit(SearchState(query=query))
        else:
            self._commit(replace(self._state, query=query, is_loading=True))
        return handle

    async def run(self, handle: RequestHandle) -> SearchState:
        """Perform the remote call for *handle* and commit if still active."""
        if not handle.query.strip():
            return self._state

        log.debug(
            "search_request_started", endpoint=self.endpoint.name, query=handle.query
        )
        try:
            items = await self.endpoint.search(handle.query)
        except Exception as exc:  # noqa: BLE001
            if not self._is_active(handle):
                self._log_discarded(handle, outcome="error")
                return self._state
            log.info(
                "search_request_failed",
                endpoint=self.endpoint.name,
                query=handle.query,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            self._commit(replace(self._state, is_loading=False, error=exc))
            return self._state

        if not self._is_active(handle):
            self._log_discarded(handle, outcome="items")
            return self._state

        log.debug(
            "search_request_succeeded",
            endpoint=self.endpoint.name,
            query=handle.query,
            count=len(items),
        )
        self._commit(
            SearchState(
                query=handle.query, items=tuple(items), is_loading=False, error=None
            )
        )
        return self._state

    async def execute(self, query: str) -> SearchState:
        """Issue and run *query* in one step."""
        return await self.run(self.issue(query))

    def _is_active(self, handle: RequestHandle) -> bool:
        return handle is self._active and not handle.cancelled

    def _log_discarded(self, handle: RequestHandle, *, outcome: str) -> None:
        log.debug(
            "search_result_discarded",
            endpoint=self.endpoint.name,
            query=handle.query,
            outcome=outcome,
        )

    def _commit(self, state: SearchState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                # Logged only; remaining listeners and the request still run.
                log.exception(
                    "state_listener_failed",
                    endpoint=self.endpoint.name,
                    query=state.query,
                )
