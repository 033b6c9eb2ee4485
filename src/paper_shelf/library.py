"""Library store: the authoritative, insertion-ordered collection of papers.

Every mutation is a pure ``collection x params -> new collection`` function.
``LibraryStore`` commits the result and hands it back; papers that a
mutation does not target are carried into the new mapping by identity.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import replace
from datetime import datetime
from types import MappingProxyType

from paper_shelf.errors import LibraryError, NotFoundError, RangeError, ValidationError
from paper_shelf.ids import Clock, IdGenerator, TimestampIdGenerator, utc_now
from paper_shelf.models import (
    DEFAULT_ANNOTATION_COLOR,
    DEFAULT_JOURNAL,
    PLACEHOLDER_USER_NAME,
    RATING_MAX,
    RATING_MIN,
    SHELF_STATUSES,
    SHELF_UNSET,
    Annotation,
    CandidatePaper,
    Comment,
    Note,
    Paper,
    Position,
    Review,
)

logger = logging.getLogger(__name__)

Library = Mapping[str, Paper]
Listener = Callable[[Library], None]


# ============================================================================
# Argument validation
# ============================================================================


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_rating(rating: object) -> int:
    """Return ``rating`` if it is an integer in [1, 5], else raise RangeError."""
    if not _is_int(rating) or not RATING_MIN <= rating <= RATING_MAX:  # type: ignore[operator]
        raise RangeError(
            f"Rating must be an integer from {RATING_MIN} to {RATING_MAX}, got {rating!r}"
        )
    return rating  # type: ignore[return-value]


def validate_page(page: object, what: str = "Page") -> int:
    """Return ``page`` if it is a positive integer, else raise RangeError."""
    if not _is_int(page) or page < 1:  # type: ignore[operator]
        raise RangeError(f"{what} must be a positive integer, got {page!r}")
    return page  # type: ignore[return-value]


def normalize_shelf(status: str | None) -> str | None:
    """Map a shelf name to the stored value; ``"unset"``/None become None."""
    if status is None or status == SHELF_UNSET:
        return None
    if status not in SHELF_STATUSES:
        raise ValidationError(
            f"Unsupported shelf: {status!r}. "
            f"Expected one of: {', '.join((*SHELF_STATUSES, SHELF_UNSET))}"
        )
    return status


# ============================================================================
# Pure transformations
# ============================================================================


def validate_candidate(candidate: CandidatePaper) -> str:
    """Return the stripped title, or raise ValidationError when it is absent."""
    title = (candidate.title or "").strip()
    if not title:
        raise ValidationError("Cannot import a paper without a title")
    return title


def build_paper(candidate: CandidatePaper, paper_id: str) -> Paper:
    """Turn a catalog candidate into a fresh library paper.

    Raises:
        ValidationError: If the candidate has no title.
    """
    title = validate_candidate(candidate)
    return Paper(
        id=paper_id,
        title=title,
        authors=tuple(candidate.authors or ()),
        abstract=candidate.summary or "",
        publication_date=candidate.published or "",
        journal=candidate.journal_ref or DEFAULT_JOURNAL,
        pdf_url=candidate.pdf_link,
        arxiv_id=candidate.id or None,
    )


def append_paper(papers: Library, paper: Paper) -> dict[str, Paper]:
    """Return a new collection with ``paper`` appended at the end."""
    if paper.id in papers:
        raise LibraryError(f"Paper id {paper.id!r} is already in the library")
    updated = dict(papers)
    updated[paper.id] = paper
    return updated


def update_paper(
    papers: Library, paper_id: str, update: Callable[[Paper], Paper]
) -> Library:
    """Replace one paper's slot with ``update(paper)``.

    Unknown ids return ``papers`` itself, unchanged.
    """
    current = papers.get(paper_id)
    if current is None:
        logger.debug("No paper with id %r; leaving the library unchanged", paper_id)
        return papers
    updated = dict(papers)
    updated[paper_id] = update(current)
    return updated


def _ensure_fresh(entity_id: str, existing: tuple) -> str:
    if any(entry.id == entity_id for entry in existing):
        raise LibraryError(f"Identifier generator reused id {entity_id!r}")
    return entity_id


# ============================================================================
# Store
# ============================================================================


class LibraryStore:
    """Owns the paper collection and applies every mutation to it.

    Args:
        id_generator: Source of paper and nested-entity ids.
        clock: Wall-clock used to timestamp notes, annotations, comments
            and reviews.
    """

    def __init__(
        self,
        *,
        id_generator: IdGenerator | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._next_id: IdGenerator = id_generator or TimestampIdGenerator()
        self._clock: Clock = clock or utc_now
        self._papers: dict[str, Paper] = {}
        self._listeners: list[Listener] = []

    # -- read side ---------------------------------------------------------

    @property
    def papers(self) -> Library:
        """Read-only view of the current collection, in insertion order."""
        return MappingProxyType(self._papers)

    def get_paper(self, paper_id: str) -> Paper | None:
        return self._papers.get(paper_id)

    def require_paper(self, paper_id: str) -> Paper:
        """Like ``get_paper`` but raises NotFoundError for unknown ids."""
        paper = self._papers.get(paper_id)
        if paper is None:
            raise NotFoundError(f"No paper with id {paper_id!r}")
        return paper

    def __len__(self) -> int:
        return len(self._papers)

    def __contains__(self, paper_id: object) -> bool:
        return paper_id in self._papers

    def __iter__(self) -> Iterator[Paper]:
        return iter(list(self._papers.values()))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new collection after every committed change.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _commit(self, papers: Library) -> Library:
        if papers is self._papers:
            return self.papers
        self._papers = dict(papers)
        view = self.papers
        for listener in list(self._listeners):
            listener(view)
        return view

    def _now(self) -> datetime:
        return self._clock()

    # -- mutations ---------------------------------------------------------

    def import_paper(self, candidate: CandidatePaper) -> Library:
        """Add a catalog candidate as a new paper at the end of the collection."""
        validate_candidate(candidate)
        paper = build_paper(candidate, self._next_id())
        logger.debug("Importing %r as paper %s", paper.title, paper.id)
        return self._commit(append_paper(self._papers, paper))

    def set_rating(self, paper_id: str, rating: int) -> Library:
        value = validate_rating(rating)
        return self._commit(
            update_paper(self._papers, paper_id, lambda p: replace(p, user_rating=value))
        )

    def set_shelf(self, paper_id: str, status: str | None) -> Library:
        """Put a paper on a shelf (``want``/``current``/``read``) or take it off (``unset``)."""
        value = normalize_shelf(status)
        return self._commit(
            update_paper(self._papers, paper_id, lambda p: replace(p, reading_status=value))
        )

    def set_current_page(self, paper_id: str, page: int) -> Library:
        """Record the reading position.

        Pages past ``total_pages`` are accepted; the viewer owns bounds
        checking since the page count may still be unknown.
        """
        value = validate_page(page)
        return self._commit(
            update_paper(self._papers, paper_id, lambda p: replace(p, current_page=value))
        )

    def add_note(self, paper_id: str, text: str, page_number: int) -> Library:
        """Append a note. Empty text is allowed."""
        page = validate_page(page_number, "Note page number")

        def _add(paper: Paper) -> Paper:
            note = Note(
                id=_ensure_fresh(self._next_id(), paper.notes),
                text=text,
                page_number=page,
                timestamp=self._now(),
            )
            return replace(paper, notes=(*paper.notes, note))

        return self._commit(update_paper(self._papers, paper_id, _add))

    def add_annotation(
        self,
        paper_id: str,
        text: str,
        color: str = DEFAULT_ANNOTATION_COLOR,
        page_number: int = 1,
        position: Position | None = None,
    ) -> Library:
        """Append a highlight. Empty text is allowed."""
        page = validate_page(page_number, "Annotation page number")
        where = position if position is not None else Position()

        def _add(paper: Paper) -> Paper:
            annotation = Annotation(
                id=_ensure_fresh(self._next_id(), paper.annotations),
                text=text,
                color=color,
                page_number=page,
                position=where,
                timestamp=self._now(),
            )
            return replace(paper, annotations=(*paper.annotations, annotation))

        return self._commit(update_paper(self._papers, paper_id, _add))

    def add_comment(self, paper_id: str, text: str) -> Library:
        """Append a comment; blank text is ignored."""
        if not text.strip():
            logger.debug("Ignoring blank comment for paper %r", paper_id)
            return self.papers

        def _add(paper: Paper) -> Paper:
            comment = Comment(
                id=_ensure_fresh(self._next_id(), paper.comments),
                text=text,
                timestamp=self._now(),
                user_name=PLACEHOLDER_USER_NAME,
            )
            return replace(paper, comments=(*paper.comments, comment))

        return self._commit(update_paper(self._papers, paper_id, _add))

    def add_review(self, paper_id: str, text: str, rating: int) -> Library:
        """Append a review; blank text is ignored, the rating must be in [1, 5]."""
        value = validate_rating(rating)
        if not text.strip():
            logger.debug("Ignoring blank review for paper %r", paper_id)
            return self.papers

        def _add(paper: Paper) -> Paper:
            review = Review(
                id=_ensure_fresh(self._next_id(), paper.reviews),
                text=text,
                rating=value,
                timestamp=self._now(),
                user_name=PLACEHOLDER_USER_NAME,
            )
            return replace(paper, reviews=(*paper.reviews, review))

        return self._commit(update_paper(self._papers, paper_id, _add))


__all__ = [
    "Library",
    "LibraryStore",
    "append_paper",
    "build_paper",
    "normalize_shelf",
    "update_paper",
    "validate_candidate",
    "validate_page",
    "validate_rating",
]
