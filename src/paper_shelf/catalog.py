"""External catalog adapter: free-text query in, normalized candidate papers out."""

from __future__ import annotations

import logging

import httpx

from paper_shelf.errors import FetchError
from paper_shelf.models import ARXIV_API_DEFAULT_MAX_RESULTS, ARXIV_PDF_HOST, CandidatePaper
from paper_shelf.parsing import parse_catalog_feed
from paper_shelf.services.catalog_service import build_search_params
from paper_shelf.services.interfaces import CatalogTransport, DirectTransport

logger = logging.getLogger(__name__)


class ArxivCatalog:
    """Searches arXiv through a ``CatalogTransport``.

    The transport may be a direct API client or a generic pass-through proxy;
    either way it hands back the raw Atom document, which is parsed here.
    """

    def __init__(
        self,
        transport: CatalogTransport | None = None,
        *,
        max_results: int = ARXIV_API_DEFAULT_MAX_RESULTS,
        pdf_host: str = ARXIV_PDF_HOST,
    ) -> None:
        self.transport = transport if transport is not None else DirectTransport()
        self.max_results = max_results
        self.pdf_host = pdf_host

    async def search(self, query: str) -> list[CandidatePaper]:
        """Run one catalog search.

        A blank query returns ``[]`` without touching the network. An empty
        result list means the catalog answered with zero entries.

        Raises:
            FetchError: On transport failure, an HTTP error status, or an
                unreadable response document.
        """
        if not query.strip():
            return []

        params = build_search_params(query, self.max_results)
        try:
            raw = await self.transport.fetch(params)
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning("Catalog search for %r failed with HTTP %d", query, status_code)
            raise FetchError(
                f"arXiv API returned HTTP {status_code}", status_code=status_code
            ) from exc
        except (httpx.HTTPError, OSError) as exc:
            logger.warning("Catalog search for %r failed: %s", query, exc, exc_info=True)
            raise FetchError("Failed to reach the arXiv API") from exc

        candidates = parse_catalog_feed(raw, self.pdf_host)
        logger.debug("Catalog search for %r returned %d candidates", query, len(candidates))
        return candidates


__all__ = ["ArxivCatalog"]
