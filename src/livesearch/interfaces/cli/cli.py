from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from livesearch.application.session import SearchSession
from livesearch.application.use_cases import QueryExecutor
from livesearch.domain.entities import EndpointNotFoundError, SearchState
from livesearch.infrastructure.actions import WebbrowserUrlOpener
from livesearch.infrastructure.config import AppConfig, load_config
from livesearch.infrastructure.endpoints import (
    build_search_url,
    create_endpoint,
    create_http_client,
)
from livesearch.infrastructure.logging.setup import configure_logging
from livesearch.interfaces.app import build_app

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="livesearch")

    # Config wiring flags (no business logic)
    parser.add_argument("--config", default=None, help="Path to YAML config file.")
    parser.add_argument("--dotenv", default=None, help="Path to .env file.")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )
    parser.add_argument(
        "--debounce-ms",
        default=None,
        type=int,
        help=(
            "Override search.debounce_ms, the quiet period of endpoints "
            "that do not set their own (github by default)."
        ),
    )

    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP API (default).")
    serve.add_argument("--host", default=None, help="Bind host (overrides HOST env).")
    serve.add_argument(
        "--port", default=None, type=int, help="Bind port (overrides PORT env)."
    )

    search = sub.add_parser("search", help="Run one query and print the final state.")
    search.add_argument("endpoint", help="Configured endpoint name, e.g. 'github'.")
    search.add_argument("term", help="Search term.")

    open_ = sub.add_parser("open", help="Open the endpoint's results page for a term.")
    open_.add_argument("endpoint", help="Configured endpoint name, e.g. 'youtube'.")
    open_.add_argument("term", help="Search term.")

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "serve"
        args.host = None
        args.port = None
    return args


async def run_search(config: AppConfig, endpoint_name: str, term: str) -> SearchState:
    """One-shot session: push *term*, wait for it to settle and resolve."""
    async with create_http_client(config) as http_client:
        endpoint = create_endpoint(endpoint_name, config=config, http_client=http_client)
        session = SearchSession(
            QueryExecutor(endpoint),
            debounce_seconds=config.debounce_seconds_for(endpoint_name),
        )
        try:
            session.set_query(term)
            return await session.wait_idle()
        finally:
            await session.aclose()


def _serve(config: AppConfig, args: argparse.Namespace, log_config: dict[str, Any]) -> int:
    host = args.host or os.getenv("HOST", "127.0.0.1")
    port = int(args.port or os.getenv("PORT", "7980"))
    uvicorn.run(build_app(config), host=host, port=port, log_config=log_config)
    return 0


def _search(config: AppConfig, args: argparse.Namespace) -> int:
    try:
        state = asyncio.run(run_search(config, args.endpoint, args.term))
    except EndpointNotFoundError:
        log.error("unknown_endpoint", endpoint=args.endpoint)
        return 2
    print(json.dumps(state.to_dict(), ensure_ascii=False, indent=2))
    return 1 if state.error is not None else 0


def _open(config: AppConfig, args: argparse.Namespace) -> int:
    endpoint = config.endpoints.get(args.endpoint)
    if endpoint is None:
        log.error("unknown_endpoint", endpoint=args.endpoint)
        return 2
    url = build_search_url(endpoint.results_url_template, args.term)
    WebbrowserUrlOpener(config.open_with).open(url)
    print(url)
    return 0


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once here, then dispatches to the subcommand.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format
    if args.debounce_ms:
        cli_overrides["debounce_ms"] = args.debounce_ms

    config = load_config(
        config_path=config_path,
        dotenv_path=dotenv_path,
        cli_overrides=cli_overrides,
    )

    log_config = configure_logging(config)

    if args.command == "search":
        return _search(config, args)
    if args.command == "open":
        return _open(config, args)
    return _serve(config, args, log_config)


if __name__ == "__main__":
    raise SystemExit(start())
