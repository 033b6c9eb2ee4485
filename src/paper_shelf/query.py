"""Query matching, shelf filtering, and paper sorting for the library view."""

from __future__ import annotations

import locale
import unicodedata
from collections.abc import Iterable, Mapping

from paper_shelf.models import Paper, SearchFilters
from paper_shelf.parsing import parse_publication_date

# ============================================================================
# Matching
# ============================================================================


def matches_query(paper: Paper, query: str) -> bool:
    """Case-insensitive substring match against the title or any author.

    An empty (or whitespace-only) query matches every paper.
    """
    needle = query.strip().casefold()
    if not needle:
        return True
    if needle in paper.title.casefold():
        return True
    return any(needle in author.casefold() for author in paper.authors)


def matches_shelf(paper: Paper, shelf: str) -> bool:
    """``"all"`` matches everything; otherwise the reading status must be equal."""
    if shelf == "all":
        return True
    return paper.reading_status == shelf


def filter_papers(papers: Iterable[Paper], filters: SearchFilters) -> list[Paper]:
    """Keep papers matching both the text query and the shelf, in input order."""
    return [
        paper
        for paper in papers
        if matches_query(paper, filters.query) and matches_shelf(paper, filters.shelf)
    ]


# ============================================================================
# Sorting
# ============================================================================


def title_sort_key(title: str) -> str:
    """Collation key for locale-aware title ordering.

    Accents are folded and case is ignored before the locale transform, so
    "Émile" sorts beside "emile" rather than after "z".
    """
    decomposed = unicodedata.normalize("NFKD", title)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return locale.strxfrm(folded)


def sort_papers(papers: Iterable[Paper], sort_key: str) -> list[Paper]:
    """Sort papers by the given key, returning a new list.

    The sort is stable: papers with equal keys keep their input order.

    Args:
        papers: Papers to sort.
        sort_key: One of "date" (newest first), "rating" (highest first,
            unrated as 0), or "title" (A to Z).
    """
    if sort_key == "date":
        return sorted(
            papers, key=lambda p: parse_publication_date(p.publication_date), reverse=True
        )
    elif sort_key == "rating":
        return sorted(papers, key=lambda p: p.user_rating or 0, reverse=True)
    elif sort_key == "title":
        return sorted(papers, key=lambda p: title_sort_key(p.title))
    return list(papers)


def view(collection: Mapping[str, Paper] | Iterable[Paper], filters: SearchFilters) -> list[Paper]:
    """Filtered, sorted papers for display. Never mutates ``collection``."""
    papers = collection.values() if isinstance(collection, Mapping) else collection
    return sort_papers(filter_papers(papers, filters), filters.sort_by)


__all__ = [
    "filter_papers",
    "matches_query",
    "matches_shelf",
    "sort_papers",
    "title_sort_key",
    "view",
]
