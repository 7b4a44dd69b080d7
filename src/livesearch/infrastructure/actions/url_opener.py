"""Open URLs in an external application via the ``webbrowser`` module."""

from __future__ import annotations

import webbrowser

import structlog

log = structlog.get_logger(__name__)


class WebbrowserUrlOpener:
    """Implements ``UrlOpenerPort``.

    Args:
        browser: Registered browser name (e.g. ``"firefox"``). ``None``
            uses the platform default.
    """

    def __init__(self, browser: str | None = None) -> None:
        self._browser = browser

    def open(self, url: str) -> None:
        try:
            controller = webbrowser.get(self._browser)
            opened = controller.open(url, new=2)
        except webbrowser.Error as exc:
            log.warning("url_open_failed", url=url, browser=self._browser, error=str(exc))
            return

        if opened:
            log.info("url_opened", url=url, browser=self._browser)
        else:
            log.warning("url_open_failed", url=url, browser=self._browser)
