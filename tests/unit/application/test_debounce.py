"""Tests for the trailing-edge Debouncer."""

from __future__ import annotations

import asyncio

import pytest

from livesearch.application.debounce import Debouncer

_DELAY = 0.02


def _collector() -> tuple[list[str], Debouncer[str]]:
    emitted: list[str] = []
    return emitted, Debouncer(_DELAY, emitted.append)


class TestInit:
    @pytest.mark.parametrize("delay", [0, -0.5])
    def test_non_positive_delay_rejected(self, delay: float) -> None:
        with pytest.raises(ValueError, match="delay"):
            Debouncer(delay, lambda _: None)

    def test_delay_exposed(self) -> None:
        assert Debouncer(0.3, lambda _: None).delay == 0.3


class TestSettlement:
    async def test_burst_emits_once_with_last_value(self) -> None:
        emitted, debouncer = _collector()
        for value in ["g", "gi", "git", "gith"]:
            debouncer.push(value)

        await debouncer.drain()

        assert emitted == ["gith"]

    async def test_no_leading_edge_emission(self) -> None:
        emitted, debouncer = _collector()
        debouncer.push("a")
        await asyncio.sleep(0)
        assert emitted == []
        assert debouncer.pending is True

        await debouncer.drain()
        assert emitted == ["a"]
        assert debouncer.pending is False

    async def test_update_inside_quiet_period_restarts_timer(self) -> None:
        emitted, debouncer = _collector()
        debouncer.push("a")
        await asyncio.sleep(_DELAY / 4)
        debouncer.push("b")

        await debouncer.drain()

        assert emitted == ["b"]

    async def test_separate_quiet_periods_emit_separately(self) -> None:
        emitted, debouncer = _collector()
        debouncer.push("a")
        await asyncio.sleep(_DELAY * 5)
        debouncer.push("b")
        await debouncer.drain()

        assert emitted == ["a", "b"]

    async def test_same_value_emitted_again_after_quiet_period(self) -> None:
        emitted, debouncer = _collector()
        debouncer.push("a")
        await debouncer.drain()
        debouncer.push("a")
        await debouncer.drain()

        assert emitted == ["a", "a"]

    async def test_drain_without_pending_returns(self) -> None:
        emitted, debouncer = _collector()
        await debouncer.drain()
        assert emitted == []


class TestClose:
    async def test_close_cancels_pending_timer(self) -> None:
        emitted, debouncer = _collector()
        debouncer.push("a")
        debouncer.close()

        await asyncio.sleep(_DELAY * 3)

        assert emitted == []
        assert debouncer.pending is False

    async def test_push_after_close_raises(self) -> None:
        _, debouncer = _collector()
        debouncer.close()
        with pytest.raises(RuntimeError, match="closed"):
            debouncer.push("a")

    async def test_close_is_idempotent(self) -> None:
        _, debouncer = _collector()
        debouncer.close()
        debouncer.close()
        assert debouncer.pending is False
