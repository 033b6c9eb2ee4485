"""arXiv Atom feed parsing, catalog query building, and publication-date parsing."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone

from paper_shelf.errors import FetchError
from paper_shelf.models import ARXIV_PDF_HOST, CandidatePaper

logger = logging.getLogger(__name__)

# Date format used in arXiv listing emails (e.g., "Mon, 15 Jan 2024")
ARXIV_DATE_FORMAT = "%a, %d %b %Y"
# Extract the date prefix when time/zone info is present
_ARXIV_DATE_PREFIX_PATTERN = re.compile(r"([A-Za-z]{3},\s+\d{1,2}\s+[A-Za-z]{3}\s+\d{4})")

# Unparseable dates sort as if published at the Unix epoch
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

ARXIV_QUERY_FIELD = "all"


def parse_publication_date(date_str: str) -> datetime:
    """Parse a catalog date string to an aware datetime for sorting.

    Accepts ISO 8601 timestamps as returned by the arXiv API
    (``2024-01-15T18:30:00Z``) and the listing format ``Mon, 15 Jan 2024``.

    Returns:
        Parsed datetime (UTC when no zone is given), or ``EPOCH`` for
        empty or malformed input.
    """
    cleaned = (date_str or "").strip()
    if not cleaned:
        return EPOCH

    normalized = cleaned[:-1] + "+00:00" if cleaned.endswith("Z") else cleaned
    try:
        return _as_utc(datetime.fromisoformat(normalized))
    except ValueError:
        pass

    match = _ARXIV_DATE_PREFIX_PATTERN.search(cleaned)
    if match:
        try:
            return _as_utc(datetime.strptime(match.group(1), ARXIV_DATE_FORMAT))
        except ValueError:
            pass

    return EPOCH


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def build_catalog_search_query(query: str) -> str:
    """Build the arXiv ``search_query`` parameter for a free-text query.

    Raises:
        ValueError: If the query is empty after whitespace normalization.
    """
    query_clean = " ".join(query.strip().split())
    if not query_clean:
        raise ValueError("Search query must be provided")
    return f"{ARXIV_QUERY_FIELD}:{query_clean}"


def pdf_link_for(identifier: str, host: str = ARXIV_PDF_HOST) -> str | None:
    """Derive the document link for a catalog identifier."""
    if not identifier:
        return None
    return f"https://{host}/pdf/{identifier}.pdf"


def identifier_from_uri(uri: str) -> str:
    """Extract the catalog identifier from an entry's canonical URI.

    Examples:
    - http://arxiv.org/abs/2401.12345v2 -> 2401.12345v2
    - http://arxiv.org/abs/hep-th/9901001v1 -> hep-th/9901001v1
    - urn:x:abc/def -> def
    """
    text = uri.strip().split("?", 1)[0].split("#", 1)[0].rstrip("/")
    if not text:
        return ""
    marker = "/abs/"
    idx = text.find(marker)
    if idx >= 0:
        return text[idx + len(marker) :]
    return text.rsplit("/", 1)[-1]


def _local_name(tag: object) -> str:
    """Strip any ``{namespace}`` prefix from an element tag."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _children(node: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in node if _local_name(child.tag) == name]


def _child_text(node: ET.Element, name: str) -> str | None:
    """Text of the first child named ``name``; None when the child is absent."""
    for child in node:
        if _local_name(child.tag) == name:
            return "".join(child.itertext())
    return None


def _collapse(text: str | None) -> str:
    if not text:
        return ""
    return " ".join(text.split())


def parse_catalog_entry(entry: ET.Element, pdf_host: str = ARXIV_PDF_HOST) -> CandidatePaper:
    """Normalize one Atom ``<entry>``; missing pieces fall back to empty values."""
    identifier = identifier_from_uri(_child_text(entry, "id") or "")
    if not identifier:
        logger.debug("Catalog entry without an id; keeping it with an empty identifier")

    authors = tuple(
        name
        for author in _children(entry, "author")
        if (name := _collapse(_child_text(author, "name")))
    )

    journal_ref = _collapse(_child_text(entry, "journal_ref")) or None

    return CandidatePaper(
        id=identifier,
        title=_collapse(_child_text(entry, "title")),
        authors=authors,
        summary=_collapse(_child_text(entry, "summary")),
        published=(_child_text(entry, "published") or "").strip(),
        pdf_link=pdf_link_for(identifier, pdf_host),
        journal_ref=journal_ref,
    )


def parse_catalog_feed(xml_text: str, pdf_host: str = ARXIV_PDF_HOST) -> list[CandidatePaper]:
    """Parse an arXiv Atom feed into candidate papers.

    Entries are matched by local element name, so feeds with or without the
    Atom namespace are both accepted. A malformed entry degrades to empty
    fields instead of failing the batch.

    Raises:
        FetchError: If the document is not well-formed XML.
    """
    if not xml_text.strip():
        return []

    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise FetchError("Invalid arXiv API XML response") from exc

    candidates = [
        parse_catalog_entry(node, pdf_host)
        for node in root.iter()
        if _local_name(node.tag) == "entry"
    ]
    logger.debug("Parsed %d catalog entries", len(candidates))
    return candidates


__all__ = [
    "ARXIV_DATE_FORMAT",
    "ARXIV_QUERY_FIELD",
    "EPOCH",
    "build_catalog_search_query",
    "identifier_from_uri",
    "parse_catalog_entry",
    "parse_catalog_feed",
    "parse_publication_date",
    "pdf_link_for",
]
