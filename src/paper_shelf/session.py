"""Library session: wires the catalog, store, selection and query view together.

This is the state a front end drives. The catalog search is the only
asynchronous step; store mutations stay legal while a search is pending.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

import httpx

from paper_shelf.catalog import ArxivCatalog
from paper_shelf.errors import FetchError
from paper_shelf.ids import Clock, IdGenerator
from paper_shelf.library import Library, LibraryStore
from paper_shelf.models import (
    SHELF_FILTERS,
    SORT_OPTIONS,
    TEXT_SIZE_DEFAULT,
    TEXT_SIZE_MAX,
    TEXT_SIZE_MIN,
    TEXT_SIZE_STEP,
    CandidatePaper,
    LibraryConfig,
    Paper,
    SearchFilters,
)
from paper_shelf.query import view
from paper_shelf.selection import ActiveSelection
from paper_shelf.services.interfaces import build_default_transport

logger = logging.getLogger(__name__)


def _clamp_text_size(size: int) -> int:
    return max(TEXT_SIZE_MIN, min(size, TEXT_SIZE_MAX))


class LibrarySession:
    """In-memory state for one run of the library."""

    def __init__(
        self,
        *,
        catalog: ArxivCatalog | None = None,
        store: LibraryStore | None = None,
        filters: SearchFilters | None = None,
        text_size: int = TEXT_SIZE_DEFAULT,
    ) -> None:
        self.catalog = catalog if catalog is not None else ArxivCatalog()
        self.store = store if store is not None else LibraryStore()
        self.selection = ActiveSelection(self.store)
        self.filters = filters if filters is not None else SearchFilters()
        self.search_results: list[CandidatePaper] = []
        self.is_searching = False
        self.reader_mode = False
        self.text_size = _clamp_text_size(text_size)
        self._search_token = 0
        self._pending_search: asyncio.Task[list[CandidatePaper]] | None = None

    @classmethod
    def from_config(
        cls,
        config: LibraryConfig,
        *,
        client: httpx.AsyncClient | None = None,
        id_generator: IdGenerator | None = None,
        clock: Clock | None = None,
    ) -> LibrarySession:
        """Build a session whose catalog, defaults and reader settings follow ``config``."""
        catalog = ArxivCatalog(
            build_default_transport(config, client),
            max_results=config.max_results,
            pdf_host=config.pdf_host,
        )
        sort_by = config.default_sort if config.default_sort in SORT_OPTIONS else SORT_OPTIONS[0]
        shelf = config.default_shelf if config.default_shelf in SHELF_FILTERS else "all"
        return cls(
            catalog=catalog,
            store=LibraryStore(id_generator=id_generator, clock=clock),
            filters=SearchFilters(sort_by=sort_by, shelf=shelf),
            text_size=config.text_size,
        )

    # -- library view -------------------------------------------------------

    @property
    def visible_papers(self) -> list[Paper]:
        """Filtered and sorted papers, recomputed from the current collection."""
        return view(self.store.papers, self.filters)

    def set_query(self, query: str) -> None:
        self.filters = replace(self.filters, query=query)

    def set_sort(self, sort_by: str) -> None:
        self.filters = replace(self.filters, sort_by=sort_by)

    def set_shelf_filter(self, shelf: str) -> None:
        self.filters = replace(self.filters, shelf=shelf)

    # -- catalog search -----------------------------------------------------

    async def search(self, query: str) -> list[CandidatePaper]:
        """Search the catalog; only the newest search may update the results.

        Each call takes a new request token. When a response (or failure)
        arrives for an older token it is discarded and the current
        ``search_results`` are returned instead.

        Raises:
            FetchError: If the newest search fails. Results are cleared and
                ``is_searching`` is reset before the error propagates.
        """
        self._search_token += 1
        token = self._search_token

        if not query.strip():
            self.search_results = []
            self.is_searching = False
            return []

        self.is_searching = True
        try:
            results = await self.catalog.search(query)
        except FetchError:
            if token != self._search_token:
                logger.debug("Dropping failure from superseded search %r", query)
                return self.search_results
            self.search_results = []
            raise
        finally:
            if token == self._search_token:
                self.is_searching = False

        if token != self._search_token:
            logger.debug("Ignoring stale results for superseded search %r", query)
            return self.search_results

        self.search_results = results
        return results

    def submit_search(self, query: str) -> asyncio.Task[list[CandidatePaper]]:
        """Schedule ``search`` as a task, cancelling the previously pending one.

        Must be called from a running event loop.
        """
        previous = self._pending_search
        if previous is not None and not previous.done():
            previous.cancel()
        task = asyncio.get_running_loop().create_task(self.search(query))
        self._pending_search = task
        return task

    def submit_query(self, query: str) -> asyncio.Task[list[CandidatePaper]]:
        """Typing in the search box: filter the library and search the catalog."""
        self.set_query(query)
        return self.submit_search(query)

    def add_search_result(self, candidate: CandidatePaper) -> Library:
        """Import a search result, then close the results and clear the query."""
        papers = self.store.import_paper(candidate)
        self._search_token += 1
        previous = self._pending_search
        if previous is not None and not previous.done():
            previous.cancel()
        self.search_results = []
        self.is_searching = False
        self.set_query("")
        return papers

    # -- reader -------------------------------------------------------------

    def open_reader(self, paper_id: str) -> Paper:
        """Open a paper in reader mode. Raises NotFoundError for unknown ids."""
        paper = self.selection.open(paper_id)
        self.reader_mode = True
        return paper

    def close_reader(self) -> None:
        self.reader_mode = False
        self.selection.close()

    def increase_text_size(self) -> int:
        self.text_size = _clamp_text_size(self.text_size + TEXT_SIZE_STEP)
        return self.text_size

    def decrease_text_size(self) -> int:
        self.text_size = _clamp_text_size(self.text_size - TEXT_SIZE_STEP)
        return self.text_size


__all__ = ["LibrarySession"]
