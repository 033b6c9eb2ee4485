"""End-to-end flow: search the catalog, import a result, read and annotate it."""

from __future__ import annotations

import httpx
import pytest

from paper_shelf.ids import CounterIdGenerator
from paper_shelf.models import LibraryConfig, ViewerRequest
from paper_shelf.session import LibrarySession


@pytest.mark.integration
@pytest.mark.asyncio
async def test_search_import_read_flow(make_feed, clock) -> None:
    feed = make_feed(
        ("2401.00001v1", "Diffusion Models Beat GANs", ("Prafulla Dhariwal", "Alex Nichol")),
        ("2401.00002v1", "Score-Based Generative Modeling", ("Yang Song",)),
    )
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text=feed)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        session = LibrarySession.from_config(
            LibraryConfig(max_results=2),
            client=client,
            id_generator=CounterIdGenerator(),
            clock=clock,
        )
        session.set_query("diffusion")
        results = await session.search("diffusion")

    assert [r.id for r in results] == ["2401.00001v1", "2401.00002v1"]
    assert requests[0].url.params["search_query"] == "all:diffusion"

    session.add_search_result(results[0])
    assert session.search_results == []
    assert session.filters.query == ""
    paper = session.store.papers["1"]
    assert paper.title == "Diffusion Models Beat GANs"
    assert paper.pdf_url == "https://arxiv.org/pdf/2401.00001v1.pdf"

    session.open_reader("1")
    session.selection.set_current_page(4)
    session.selection.add_note("Classifier guidance")
    session.selection.add_review("Convincing results", 5)
    session.store.set_shelf("1", "current")

    assert session.selection.viewer_request() == ViewerRequest(
        url="https://arxiv.org/pdf/2401.00001v1.pdf", page=4
    )
    opened = session.selection.paper
    assert opened.notes[0].page_number == 4
    assert opened.reviews[0].rating == 5
    assert opened.reading_status == "current"

    session.set_shelf_filter("current")
    assert [p.id for p in session.visible_papers] == ["1"]
    session.set_shelf_filter("read")
    assert session.visible_papers == []
