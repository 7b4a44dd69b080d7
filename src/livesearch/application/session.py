"""Search session: debounced input bound to one QueryExecutor."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import structlog

from livesearch.application.debounce import Debouncer
from livesearch.application.use_cases.query_executor import QueryExecutor, StateListener
from livesearch.domain.entities import SearchState

log = structlog.get_logger(__name__)


class SearchSession:
    """Presentation boundary of the pipeline.

    The presentation layer calls :meth:`set_query` on every raw input
    change and reads :attr:`state` (or subscribes to it). Settled queries
    are handed to the executor in debounce order.
    """

    def __init__(self, executor: QueryExecutor, *, debounce_seconds: float) -> None:
        self._executor = executor
        self._debouncer: Debouncer[str] = Debouncer(debounce_seconds, self._on_settled)
        self._tasks: set[asyncio.Task[SearchState]] = set()
        self._text = ""
        self._closed = False

    @property
    def endpoint_name(self) -> str:
        return self._executor.endpoint.name

    @property
    def text(self) -> str:
        """Latest raw input, before debouncing."""
        return self._text

    @property
    def state(self) -> SearchState:
        return self._executor.state

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self._executor.subscribe(listener)

    def set_query(self, text: str) -> None:
        """Feed one raw input change into the debouncer."""
        if self._closed:
            raise RuntimeError("search session is closed")
        self._text = text
        self._debouncer.push(text)

    async def wait_idle(self) -> SearchState:
        """Wait until no settlement is pending and no request is in flight."""
        while self._debouncer.pending or self._tasks:
            await self._debouncer.drain()
            if self._tasks:
                await asyncio.wait(set(self._tasks))
        return self.state

    async def aclose(self) -> None:
        """Teardown: cancel the pending timer and abandon in-flight requests."""
        if self._closed:
            return
        self._closed = True
        self._debouncer.close()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.wait(tasks)
        log.debug(
            "search_session_closed",
            endpoint=self.endpoint_name,
            abandoned_requests=len(tasks),
        )

    def _on_settled(self, query: str) -> None:
        handle = self._executor.issue(query)
        task = asyncio.get_running_loop().create_task(self._executor.run(handle))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
