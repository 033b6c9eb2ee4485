"""The actively open paper, kept as a live view of the library store."""

from __future__ import annotations

import logging

from paper_shelf.errors import NotFoundError
from paper_shelf.library import Library, LibraryStore
from paper_shelf.models import DEFAULT_ANNOTATION_COLOR, Paper, Position, ViewerRequest

logger = logging.getLogger(__name__)


class ActiveSelection:
    """Tracks which paper is open for reading.

    Only the paper id is held here. ``paper`` is looked up in the store on
    every access, so any store mutation of the open paper (made through this
    class or directly on the store) is visible immediately and the open view
    can never hold a stale copy.
    """

    def __init__(self, store: LibraryStore) -> None:
        self._store = store
        self._paper_id: str | None = None

    @property
    def store(self) -> LibraryStore:
        return self._store

    @property
    def paper_id(self) -> str | None:
        return self._paper_id

    @property
    def is_open(self) -> bool:
        return self.paper is not None

    @property
    def paper(self) -> Paper | None:
        """Current value of the open paper, or None when nothing is open."""
        if self._paper_id is None:
            return None
        return self._store.get_paper(self._paper_id)

    def open(self, paper_id: str) -> Paper:
        """Open a paper by id.

        Raises:
            NotFoundError: If the store has no such paper.
        """
        paper = self._store.require_paper(paper_id)
        self._paper_id = paper_id
        logger.debug("Opened paper %s", paper_id)
        return paper

    def close(self) -> None:
        self._paper_id = None

    def viewer_request(self) -> ViewerRequest | None:
        """Document location and page to hand to the viewer for the open paper."""
        paper = self.paper
        if paper is None:
            return None
        return ViewerRequest(url=paper.pdf_url, page=paper.current_page)

    # -- operations on the open paper ---------------------------------------
    #
    # Each one is a store call parameterized by the open paper's id. With no
    # paper open they leave the library untouched.

    def set_current_page(self, page: int) -> Library:
        if self._paper_id is None:
            return self._store.papers
        return self._store.set_current_page(self._paper_id, page)

    def jump_to_section(self, index: int) -> Library:
        """Move to the page of a table-of-contents entry.

        Raises:
            NotFoundError: If the open paper has no section at ``index``.
        """
        paper = self.paper
        if paper is None:
            return self._store.papers
        if not 0 <= index < len(paper.sections):
            raise NotFoundError(f"Paper {paper.id!r} has no section #{index}")
        return self._store.set_current_page(paper.id, paper.sections[index].page)

    def add_note(self, text: str, page_number: int | None = None) -> Library:
        """Add a note, on the current page unless ``page_number`` is given."""
        paper = self.paper
        if paper is None:
            return self._store.papers
        page = paper.current_page if page_number is None else page_number
        return self._store.add_note(paper.id, text, page)

    def add_annotation(
        self,
        text: str,
        color: str = DEFAULT_ANNOTATION_COLOR,
        page_number: int | None = None,
        position: Position | None = None,
    ) -> Library:
        paper = self.paper
        if paper is None:
            return self._store.papers
        page = paper.current_page if page_number is None else page_number
        return self._store.add_annotation(paper.id, text, color, page, position)

    def add_comment(self, text: str) -> Library:
        if self._paper_id is None:
            return self._store.papers
        return self._store.add_comment(self._paper_id, text)

    def add_review(self, text: str, rating: int) -> Library:
        if self._paper_id is None:
            return self._store.papers
        return self._store.add_review(self._paper_id, text, rating)


__all__ = ["ActiveSelection"]
