"""Display labels for papers and search results."""

from __future__ import annotations

from rich.markup import escape as escape_markup

from paper_shelf.models import ARXIV_PDF_HOST, Paper
from paper_shelf.parsing import EPOCH, parse_publication_date


def truncate_text(text: str, max_len: int, suffix: str = "...") -> str:
    """Truncate text to max_len characters, adding suffix if truncated.

    Args:
        text: The text to truncate.
        max_len: Maximum length before truncation (not including suffix).
        suffix: String to append when truncated.

    Returns:
        Original text if within limit, otherwise truncated with suffix.
    """
    if len(text) <= max_len:
        return text
    return text[:max_len] + suffix


def escape_rich_text(text: str) -> str:
    """Escape text for safe Rich markup rendering."""
    return escape_markup(text) if text else ""


def format_authors(authors: tuple[str, ...] | list[str]) -> str:
    return ", ".join(authors)


def format_date(date_str: str) -> str:
    """``YYYY-MM-DD`` for parseable dates, otherwise the raw text."""
    parsed = parse_publication_date(date_str)
    if parsed == EPOCH:
        return date_str.strip()
    return parsed.date().isoformat()


def format_rating_label(rating: int | None) -> str:
    if not rating:
        return "Rate this paper"
    return f"{rating} star" if rating == 1 else f"{rating} stars"


def format_page_status(paper: Paper) -> str:
    """Reader header text: the page position, or a loading hint without a document."""
    if not paper.pdf_url:
        return "Loading PDF..."
    return f"Page {paper.current_page} of {paper.total_pages}"


def abstract_page_url(paper: Paper, host: str = ARXIV_PDF_HOST) -> str | None:
    """Link to the catalog's abstract page, when the paper came from the catalog."""
    if not paper.arxiv_id:
        return None
    return f"https://{host}/abs/{paper.arxiv_id}"


__all__ = [
    "abstract_page_url",
    "escape_rich_text",
    "format_authors",
    "format_date",
    "format_page_status",
    "format_rating_label",
    "truncate_text",
]
