"""Trailing-edge debouncer for a stream of value updates."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

log = structlog.get_logger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Emit the latest value once no update arrived for ``delay`` seconds.

    Every :meth:`push` cancels the pending timer and starts a new one, so
    N pushes inside one quiet period produce exactly one emission carrying
    the last value. There is no leading-edge emission.

    ``on_settled`` runs synchronously on the event loop when the timer
    fires. Must be used from within a running event loop.
    """

    def __init__(self, delay: float, on_settled: Callable[[T], None]) -> None:
        if delay <= 0:
            raise ValueError("delay must be > 0")
        self._delay = delay
        self._on_settled = on_settled
        self._latest: T | None = None
        self._pending: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a timer is running."""
        return self._pending is not None

    def push(self, value: T) -> None:
        """Record *value* and restart the quiet-period timer."""
        if self._closed:
            raise RuntimeError("debouncer is closed")
        self._latest = value
        self._cancel_pending()
        self._pending = asyncio.get_running_loop().create_task(self._settle())

    async def drain(self) -> None:
        """Wait until no timer is pending (fired or cancelled)."""
        while self._pending is not None:
            # asyncio.wait does not raise when the timer task is cancelled.
            await asyncio.wait({self._pending})

    def close(self) -> None:
        """Cancel any pending timer; nothing is emitted afterwards."""
        self._closed = True
        self._cancel_pending()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    async def _settle(self) -> None:
        await asyncio.sleep(self._delay)
        self._pending = None
        value = self._latest
        log.debug("debounce_settled", value=value)
        self._on_settled(value)  # type: ignore[arg-type]
