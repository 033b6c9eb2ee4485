"""Data models and constants for the paper-shelf library."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from paper_shelf.errors import ValidationError

# Application identity: single source of truth for platformdirs config paths
CONFIG_APP_NAME = "paper-shelf"

# Sort order options (first entry is the default)
SORT_OPTIONS = ["date", "rating", "title"]

# Reading shelves. A paper with no shelf has reading_status None.
SHELF_STATUSES = ("want", "current", "read")
SHELF_UNSET = "unset"
SHELF_FILTERS = ("all", *SHELF_STATUSES)
SHELF_LABELS: dict[str, str] = {
    "all": "All Papers",
    "want": "Want to Read",
    "current": "Currently Reading",
    "read": "Read",
}

# Rating bounds shared by paper ratings and reviews
RATING_MIN = 1
RATING_MAX = 5
DEFAULT_REVIEW_RATING = 5

# Journal shown for papers that only exist as preprints
DEFAULT_JOURNAL = "arXiv preprint"

# Single-user placeholder for comment/review authorship
PLACEHOLDER_USER_NAME = "Anonymous User"

DEFAULT_ANNOTATION_COLOR = "#FFEB3B"

# arXiv API constants
ARXIV_API_URL = "https://export.arxiv.org/api/query"
ARXIV_PDF_HOST = "arxiv.org"
ARXIV_API_DEFAULT_MAX_RESULTS = 10
ARXIV_API_MAX_RESULTS_LIMIT = 100
ARXIV_API_TIMEOUT = 30
ARXIV_API_USER_AGENT = "paper-shelf/1.0"

# Reader text size (points)
TEXT_SIZE_DEFAULT = 16
TEXT_SIZE_MIN = 12
TEXT_SIZE_MAX = 24
TEXT_SIZE_STEP = 2


@dataclass(frozen=True, slots=True)
class Position:
    """2-D location of an annotation on a page."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True, slots=True)
class Section:
    """Table-of-contents entry."""

    title: str
    page: int


@dataclass(frozen=True, slots=True)
class Annotation:
    """Highlight placed on a page."""

    id: str
    text: str
    color: str
    page_number: int
    position: Position
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class Note:
    """Free-text note tied to a page."""

    id: str
    text: str
    page_number: int
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class Comment:
    id: str
    text: str
    timestamp: datetime
    user_name: str = PLACEHOLDER_USER_NAME


@dataclass(frozen=True, slots=True)
class Review:
    id: str
    text: str
    rating: int
    timestamp: datetime
    user_name: str = PLACEHOLDER_USER_NAME


@dataclass(frozen=True, slots=True)
class Paper:
    """A paper in the library.

    Instances are never mutated; the store swaps in a new value carrying the
    same ``id`` on every change.
    """

    id: str
    title: str
    authors: tuple[str, ...] = ()
    abstract: str = ""
    publication_date: str = ""
    journal: str = DEFAULT_JOURNAL
    user_rating: int | None = None
    citations: int = 0
    doi: str = ""
    arxiv_id: str | None = None
    reading_status: str | None = None  # "want" | "current" | "read" | None
    pdf_url: str | None = None
    current_page: int = 1
    total_pages: int = 0  # 0 = unknown
    sections: tuple[Section, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    notes: tuple[Note, ...] = ()
    comments: tuple[Comment, ...] = ()
    reviews: tuple[Review, ...] = ()


@dataclass(frozen=True, slots=True)
class CandidatePaper:
    """Normalized catalog search result, not yet part of the library."""

    id: str
    title: str
    authors: tuple[str, ...] = ()
    summary: str = ""
    published: str = ""
    pdf_link: str | None = None
    journal_ref: str | None = None


@dataclass(frozen=True, slots=True)
class SearchFilters:
    """Filter and sort criteria for the library view."""

    query: str = ""
    sort_by: str = "date"  # "date" | "rating" | "title"
    shelf: str = "all"  # "all" | "want" | "current" | "read"

    def __post_init__(self) -> None:
        if self.sort_by not in SORT_OPTIONS:
            raise ValidationError(
                f"Unsupported sort key: {self.sort_by!r}. "
                f"Expected one of: {', '.join(SORT_OPTIONS)}"
            )
        if self.shelf not in SHELF_FILTERS:
            raise ValidationError(
                f"Unsupported shelf filter: {self.shelf!r}. "
                f"Expected one of: {', '.join(SHELF_FILTERS)}"
            )


@dataclass(frozen=True, slots=True)
class ViewerRequest:
    """What the document viewer is asked to show. ``url=None`` means not yet available."""

    url: str | None
    page: int


@dataclass(slots=True)
class LibraryConfig:
    """User preferences. Never holds library state."""

    catalog_api_url: str = ARXIV_API_URL
    pdf_host: str = ARXIV_PDF_HOST
    max_results: int = ARXIV_API_DEFAULT_MAX_RESULTS
    timeout_seconds: int = ARXIV_API_TIMEOUT
    user_agent: str = ARXIV_API_USER_AGENT
    proxy_url: str = ""  # Empty = talk to the catalog directly
    default_sort: str = SORT_OPTIONS[0]
    default_shelf: str = SHELF_FILTERS[0]
    text_size: int = TEXT_SIZE_DEFAULT
    version: int = 1


__all__ = [
    "ARXIV_API_DEFAULT_MAX_RESULTS",
    "ARXIV_API_MAX_RESULTS_LIMIT",
    "ARXIV_API_TIMEOUT",
    "ARXIV_API_URL",
    "ARXIV_API_USER_AGENT",
    "ARXIV_PDF_HOST",
    "CONFIG_APP_NAME",
    "DEFAULT_ANNOTATION_COLOR",
    "DEFAULT_JOURNAL",
    "DEFAULT_REVIEW_RATING",
    "PLACEHOLDER_USER_NAME",
    "RATING_MAX",
    "RATING_MIN",
    "SHELF_FILTERS",
    "SHELF_LABELS",
    "SHELF_STATUSES",
    "SHELF_UNSET",
    "SORT_OPTIONS",
    "TEXT_SIZE_DEFAULT",
    "TEXT_SIZE_MAX",
    "TEXT_SIZE_MIN",
    "TEXT_SIZE_STEP",
    "Annotation",
    "CandidatePaper",
    "Comment",
    "LibraryConfig",
    "Note",
    "Paper",
    "Position",
    "Review",
    "SearchFilters",
    "Section",
    "ViewerRequest",
]
