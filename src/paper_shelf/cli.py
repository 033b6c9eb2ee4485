"""CLI/bootstrap helpers: search the catalog from a terminal."""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.handlers
import os
import sys
from collections.abc import Awaitable, Callable
from dataclasses import replace
from pathlib import Path

import httpx
from platformdirs import user_config_dir
from rich.console import Console
from rich.table import Table

from paper_shelf.action_messages import build_search_failure_message
from paper_shelf.config import CONFIG_APP_NAME, _coerce_max_results, load_config
from paper_shelf.errors import FetchError
from paper_shelf.formatting import escape_rich_text, format_authors, format_date, truncate_text
from paper_shelf.models import (
    ARXIV_API_MAX_RESULTS_LIMIT,
    DEFAULT_JOURNAL,
    CandidatePaper,
    LibraryConfig,
)
from paper_shelf.session import LibrarySession

logger = logging.getLogger(__name__)

SearchFn = Callable[[LibraryConfig, str], Awaitable[list[CandidatePaper]]]


async def _search_catalog(config: LibraryConfig, query: str) -> list[CandidatePaper]:
    """Run one catalog search with a short-lived shared HTTP client."""
    async with httpx.AsyncClient() as client:
        session = LibrarySession.from_config(config, client=client)
        return await session.search(query)


def _build_results_table(results: list[CandidatePaper]) -> Table:
    table = Table(title=f"{len(results)} result{'s' if len(results) != 1 else ''}")
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("arXiv ID", no_wrap=True)
    table.add_column("Title")
    table.add_column("Authors")
    table.add_column("Published", no_wrap=True)
    table.add_column("Journal")
    for index, candidate in enumerate(results, start=1):
        table.add_row(
            str(index),
            escape_rich_text(candidate.id) or "-",
            escape_rich_text(candidate.title) or "(untitled)",
            escape_rich_text(truncate_text(format_authors(candidate.authors), 60)),
            escape_rich_text(format_date(candidate.published)),
            escape_rich_text(candidate.journal_ref or DEFAULT_JOURNAL),
        )
    return table


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: keep library logging out of the command output
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _configure_color_mode(color_mode: str) -> None:
    """Configure environment hints for terminal color behavior."""
    if color_mode == "never":
        os.environ["NO_COLOR"] = "1"
        os.environ.pop("FORCE_COLOR", None)
        return
    if color_mode == "always":
        os.environ["FORCE_COLOR"] = "1"
        os.environ.pop("NO_COLOR", None)
        return
    # auto
    os.environ.pop("FORCE_COLOR", None)


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], LibraryConfig] = load_config,
    search_fn: SearchFn = _search_catalog,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    configure_color_mode_fn: Callable[[str], None] = _configure_color_mode,
    console: Console | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    parser = argparse.ArgumentParser(description="Search arXiv for papers to add to your shelf")
    parser.add_argument("query", nargs="+", help="Free-text search query")
    parser.add_argument(
        "--max-results",
        type=int,
        default=None,
        help=f"Number of results (1-{ARXIV_API_MAX_RESULTS_LIMIT}; default: config value)",
    )
    parser.add_argument(
        "--proxy-url",
        type=str,
        default=None,
        help="Send catalog requests through this pass-through proxy endpoint",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/paper-shelf/debug.log)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode (default: auto)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors (equivalent to --color never)",
    )
    args = parser.parse_args(argv)

    color_mode = "never" if args.no_color else args.color
    configure_color_mode_fn(color_mode)
    configure_logging_fn(args.debug)

    query = " ".join(args.query).strip()
    if not query:
        print("Error: search query must not be empty", file=sys.stderr)
        return 1

    config = load_config_fn()
    if args.max_results is not None:
        config = replace(config, max_results=_coerce_max_results(args.max_results))
    if args.proxy_url is not None:
        config = replace(config, proxy_url=args.proxy_url.strip())
    logger.debug("Searching catalog for %r (max_results=%d)", query, config.max_results)

    try:
        results = asyncio.run(search_fn(config, query))
    except FetchError as exc:
        print(build_search_failure_message(exc), file=sys.stderr)
        return 1

    out = console if console is not None else Console(no_color=color_mode == "never")
    if not results:
        out.print("No results found")
        return 0
    out.print(_build_results_table(results))
    return 0


__all__ = [
    "_build_results_table",
    "_configure_color_mode",
    "_configure_logging",
    "_search_catalog",
    "main",
]
