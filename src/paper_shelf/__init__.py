"""paper-shelf: a personal research-paper library backed by the arXiv catalog."""

from paper_shelf.catalog import ArxivCatalog
from paper_shelf.config import load_config, save_config
from paper_shelf.errors import (
    FetchError,
    LibraryError,
    NotFoundError,
    RangeError,
    ValidationError,
)
from paper_shelf.ids import CounterIdGenerator, IdGenerator, TimestampIdGenerator
from paper_shelf.library import Library, LibraryStore
from paper_shelf.models import (
    Annotation,
    CandidatePaper,
    Comment,
    LibraryConfig,
    Note,
    Paper,
    Position,
    Review,
    SearchFilters,
    Section,
    ViewerRequest,
)
from paper_shelf.parsing import parse_catalog_feed, parse_publication_date
from paper_shelf.query import filter_papers, matches_query, sort_papers, view
from paper_shelf.selection import ActiveSelection
from paper_shelf.services import CatalogTransport, DirectTransport, ProxyTransport
from paper_shelf.session import LibrarySession

__all__ = [
    "ActiveSelection",
    "Annotation",
    "ArxivCatalog",
    "CandidatePaper",
    "CatalogTransport",
    "Comment",
    "CounterIdGenerator",
    "DirectTransport",
    "FetchError",
    "IdGenerator",
    "Library",
    "LibraryConfig",
    "LibraryError",
    "LibrarySession",
    "LibraryStore",
    "Note",
    "NotFoundError",
    "Paper",
    "Position",
    "ProxyTransport",
    "RangeError",
    "Review",
    "SearchFilters",
    "Section",
    "TimestampIdGenerator",
    "ValidationError",
    "ViewerRequest",
    "filter_papers",
    "load_config",
    "matches_query",
    "parse_catalog_feed",
    "parse_publication_date",
    "save_config",
    "sort_papers",
    "view",
]
