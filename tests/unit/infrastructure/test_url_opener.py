"""Tests for WebbrowserUrlOpener."""

from __future__ import annotations

import webbrowser
from unittest.mock import MagicMock

import pytest

from livesearch.infrastructure.actions import WebbrowserUrlOpener


class TestOpen:
    def test_opens_in_default_browser(self, monkeypatch: pytest.MonkeyPatch) -> None:
        controller = MagicMock()
        controller.open.return_value = True
        get = MagicMock(return_value=controller)
        monkeypatch.setattr(webbrowser, "get", get)

        WebbrowserUrlOpener().open("https://github.com/a/b")

        get.assert_called_once_with(None)
        controller.open.assert_called_once_with("https://github.com/a/b", new=2)

    def test_named_browser(self, monkeypatch: pytest.MonkeyPatch) -> None:
        controller = MagicMock()
        get = MagicMock(return_value=controller)
        monkeypatch.setattr(webbrowser, "get", get)

        WebbrowserUrlOpener("firefox").open("https://example.com")

        get.assert_called_once_with("firefox")

    def test_unknown_browser_does_not_raise(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            webbrowser, "get", MagicMock(side_effect=webbrowser.Error("no browser"))
        )

        assert WebbrowserUrlOpener("dia").open("https://example.com") is None

    def test_refused_open_does_not_raise(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        controller = MagicMock()
        controller.open.return_value = False
        monkeypatch.setattr(webbrowser, "get", MagicMock(return_value=controller))

        WebbrowserUrlOpener().open("https://example.com")

        controller.open.assert_called_once()
