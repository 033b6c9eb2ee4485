"""Tests for the command-line entry point."""

from __future__ import annotations

import io
import logging
import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from paper_shelf.cli import (
    _build_results_table,
    _configure_color_mode,
    _configure_logging,
    main,
)
from paper_shelf.errors import FetchError
from paper_shelf.models import LibraryConfig


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, no_color=True)


def _run(argv, console, *, search_fn=None, config=None):
    search_fn = search_fn or AsyncMock(return_value=[])
    return main(
        argv,
        load_config_fn=lambda: config or LibraryConfig(),
        search_fn=search_fn,
        configure_logging_fn=MagicMock(),
        configure_color_mode_fn=MagicMock(),
        console=console,
    )


def test_prints_results_table(console, make_candidate) -> None:
    search_fn = AsyncMock(
        return_value=[make_candidate(title="Graph [Networks]", authors=("Ada", "Bob"))]
    )
    assert _run(["graph", "networks"], console, search_fn=search_fn) == 0

    output = console.file.getvalue()
    assert "Graph [Networks]" in output
    assert "Ada, Bob" in output
    assert "2024-01-15" in output
    assert "arXiv preprint" in output
    assert search_fn.await_args.args[1] == "graph networks"


def test_zero_results_exit_zero(console) -> None:
    assert _run(["nothing"], console) == 0
    assert "No results found" in console.file.getvalue()


def test_fetch_error_prints_actionable_message(console, capsys) -> None:
    search_fn = AsyncMock(side_effect=FetchError("HTTP 429", status_code=429))
    assert _run(["graphs"], console, search_fn=search_fn) == 1
    err = capsys.readouterr().err
    assert "Could not search arXiv." in err
    assert "rate limit" in err


def test_blank_query_is_rejected(console, capsys) -> None:
    search_fn = AsyncMock()
    assert _run(["   "], console, search_fn=search_fn) == 1
    search_fn.assert_not_awaited()
    assert "must not be empty" in capsys.readouterr().err


def test_overrides_applied_to_config(console) -> None:
    search_fn = AsyncMock(return_value=[])
    _run(
        ["q", "--max-results", "500", "--proxy-url", " https://proxy.example "],
        console,
        search_fn=search_fn,
    )
    config = search_fn.await_args.args[0]
    assert config.max_results == 100
    assert config.proxy_url == "https://proxy.example"


def test_no_color_flag_wins(console) -> None:
    color_fn = MagicMock()
    logging_fn = MagicMock()
    main(
        ["q", "--no-color", "--debug"],
        load_config_fn=LibraryConfig,
        search_fn=AsyncMock(return_value=[]),
        configure_logging_fn=logging_fn,
        configure_color_mode_fn=color_fn,
        console=console,
    )
    color_fn.assert_called_once_with("never")
    logging_fn.assert_called_once_with(True)


def test_missing_query_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([], configure_logging_fn=MagicMock(), configure_color_mode_fn=MagicMock())
    assert exc_info.value.code == 2


def test_configure_color_mode(monkeypatch) -> None:
    for name in ("NO_COLOR", "FORCE_COLOR"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    _configure_color_mode("always")
    assert os.environ["FORCE_COLOR"] == "1"
    _configure_color_mode("never")
    env = os.environ
    assert env.get("NO_COLOR") == "1" and "FORCE_COLOR" not in env


def test_results_table_row_count(make_candidate) -> None:
    table = _build_results_table([make_candidate(), make_candidate(id="")])
    assert table.row_count == 2


def test_configure_logging_disabled_by_default() -> None:
    try:
        _configure_logging(False)
        assert logging.root.manager.disable == logging.CRITICAL
    finally:
        logging.disable(logging.NOTSET)
