"""Shared test fixtures for paper-shelf tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest

from paper_shelf.catalog import ArxivCatalog
from paper_shelf.ids import CounterIdGenerator
from paper_shelf.library import LibraryStore
from paper_shelf.models import CandidatePaper, Paper
from paper_shelf.services.interfaces import DirectTransport
from paper_shelf.session import LibrarySession

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_candidate():
    """Factory fixture for catalog search results with sensible defaults."""

    def _make(
        id: str = "2401.12345v1",
        title: str = "Test Paper",
        authors: tuple[str, ...] = ("Test Author",),
        summary: str = "Test abstract content.",
        published: str = "2024-01-15T18:30:00Z",
        pdf_link: str | None = "https://arxiv.org/pdf/2401.12345v1.pdf",
        journal_ref: str | None = None,
    ) -> CandidatePaper:
        return CandidatePaper(
            id=id,
            title=title,
            authors=authors,
            summary=summary,
            published=published,
            pdf_link=pdf_link,
            journal_ref=journal_ref,
        )

    return _make


@pytest.fixture
def make_paper():
    """Factory fixture for library papers; any Paper field can be overridden."""
    counter = iter(range(1, 10_000))

    def _make(**kwargs: Any) -> Paper:
        kwargs.setdefault("id", f"p{next(counter)}")
        kwargs.setdefault("title", "Test Paper")
        kwargs.setdefault("authors", ("Test Author",))
        kwargs.setdefault("publication_date", "2024-01-15T18:30:00Z")
        return Paper(**kwargs)

    return _make


@pytest.fixture
def clock():
    """Deterministic clock that advances one second per call."""
    ticks = iter(range(10_000))
    return lambda: FIXED_NOW + timedelta(seconds=next(ticks))


@pytest.fixture
def store(clock) -> LibraryStore:
    """Empty store with sequential ids ("1", "2", ...) and a fixed clock."""
    return LibraryStore(id_generator=CounterIdGenerator(), clock=clock)


@pytest.fixture
def make_feed():
    """Build an Atom feed document from (id, title, authors) tuples."""

    def _make(*entries: tuple[str, str, tuple[str, ...]], namespaced: bool = True) -> str:
        xmlns = ' xmlns="http://www.w3.org/2005/Atom"' if namespaced else ""
        body = []
        for identifier, title, authors in entries:
            author_xml = "".join(f"<author><name>{name}</name></author>" for name in authors)
            body.append(
                "<entry>"
                f"<id>http://arxiv.org/abs/{identifier}</id>"
                f"<title>{title}</title>"
                "<summary>An abstract.</summary>"
                "<published>2024-01-15T18:30:00Z</published>"
                f"{author_xml}"
                "</entry>"
            )
        return f'<?xml version="1.0" encoding="UTF-8"?><feed{xmlns}>{"".join(body)}</feed>'

    return _make


@pytest.fixture
def make_session(store):
    """Factory for sessions whose catalog answers through an httpx.MockTransport."""

    def _make(handler, **kwargs: Any) -> LibrarySession:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        catalog = ArxivCatalog(DirectTransport(client=client))
        return LibrarySession(catalog=catalog, store=store, **kwargs)

    return _make
