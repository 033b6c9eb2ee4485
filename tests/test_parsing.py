"""Tests for Atom feed parsing, query building, and date parsing."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from paper_shelf.errors import FetchError
from paper_shelf.parsing import (
    EPOCH,
    build_catalog_search_query,
    identifier_from_uri,
    parse_catalog_feed,
    parse_publication_date,
    pdf_link_for,
)

ATOM_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:arxiv="http://arxiv.org/schemas/atom">
  <title>ArXiv Query</title>
  <entry>
    <id>http://arxiv.org/abs/2401.12345v2</id>
    <published>2024-01-15T18:30:00Z</published>
    <title>Attention
      Is All You Need</title>
    <summary>  We propose a new
      architecture.  </summary>
    <author><name>Ashish Vaswani</name></author>
    <author><name>Noam Shazeer</name></author>
    <arxiv:journal_ref>NeurIPS 2017</arxiv:journal_ref>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/hep-th/9901001v1</id>
    <published>1999-01-04T00:00:00Z</published>
    <title>No Authors Here</title>
    <summary>Abstract.</summary>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2402.00001v1</id>
    <title>Third</title>
    <author><name>  </name></author>
    <author><name>Real Person</name></author>
  </entry>
</feed>
"""


class TestParseCatalogFeed:
    def test_three_entries_one_without_authors(self) -> None:
        results = parse_catalog_feed(ATOM_FEED)
        assert len(results) == 3
        assert results[1].authors == ()

    def test_fields_are_normalized(self) -> None:
        first = parse_catalog_feed(ATOM_FEED)[0]
        assert first.id == "2401.12345v2"
        assert first.title == "Attention Is All You Need"
        assert first.summary == "We propose a new architecture."
        assert first.authors == ("Ashish Vaswani", "Noam Shazeer")
        assert first.published == "2024-01-15T18:30:00Z"
        assert first.pdf_link == "https://arxiv.org/pdf/2401.12345v2.pdf"
        assert first.journal_ref == "NeurIPS 2017"

    def test_old_style_identifier_kept_whole(self) -> None:
        second = parse_catalog_feed(ATOM_FEED)[1]
        assert second.id == "hep-th/9901001v1"
        assert second.journal_ref is None

    def test_missing_fields_default_to_empty(self) -> None:
        third = parse_catalog_feed(ATOM_FEED)[2]
        assert third.summary == ""
        assert third.published == ""
        assert third.authors == ("Real Person",)

    def test_feed_without_namespace(self, make_feed) -> None:
        xml = make_feed(("2401.1", "One", ("A",)), ("2401.2", "Two", ()), namespaced=False)
        results = parse_catalog_feed(xml)
        assert [r.title for r in results] == ["One", "Two"]

    def test_custom_pdf_host(self, make_feed) -> None:
        xml = make_feed(("2401.1", "One", ("A",)))
        (result,) = parse_catalog_feed(xml, pdf_host="export.arxiv.org")
        assert result.pdf_link == "https://export.arxiv.org/pdf/2401.1.pdf"

    def test_entry_without_id(self) -> None:
        xml = '<feed xmlns="http://www.w3.org/2005/Atom"><entry><title>T</title></entry></feed>'
        (result,) = parse_catalog_feed(xml)
        assert result.id == ""
        assert result.pdf_link is None

    def test_zero_entries(self) -> None:
        assert parse_catalog_feed('<feed xmlns="http://www.w3.org/2005/Atom"/>') == []

    def test_blank_document(self) -> None:
        assert parse_catalog_feed("   ") == []

    def test_invalid_xml_raises_fetch_error(self) -> None:
        with pytest.raises(FetchError):
            parse_catalog_feed("<feed><entry>")


@pytest.mark.parametrize(
    ("uri", "expected"),
    [
        ("http://arxiv.org/abs/2401.12345v2", "2401.12345v2"),
        ("https://arxiv.org/abs/hep-th/9901001v1", "hep-th/9901001v1"),
        ("http://arxiv.org/abs/2401.12345v2/", "2401.12345v2"),
        ("urn:x:abc/def", "def"),
        ("  ", ""),
    ],
)
def test_identifier_from_uri(uri, expected) -> None:
    assert identifier_from_uri(uri) == expected


def test_pdf_link_for() -> None:
    assert pdf_link_for("2401.12345v1") == "https://arxiv.org/pdf/2401.12345v1.pdf"
    assert pdf_link_for("") is None


class TestBuildCatalogSearchQuery:
    def test_collapses_whitespace(self) -> None:
        assert build_catalog_search_query("  graph   neural\tnets ") == "all:graph neural nets"

    def test_blank_raises(self) -> None:
        with pytest.raises(ValueError, match="must be provided"):
            build_catalog_search_query("   ")


class TestParsePublicationDate:
    def test_iso_with_z(self) -> None:
        assert parse_publication_date("2024-01-15T18:30:00Z") == datetime(
            2024, 1, 15, 18, 30, tzinfo=timezone.utc
        )

    def test_listing_format(self) -> None:
        assert parse_publication_date("Mon, 15 Jan 2024 (12kb)") == datetime(
            2024, 1, 15, tzinfo=timezone.utc
        )

    def test_naive_iso_date_is_utc(self) -> None:
        assert parse_publication_date("2023-06-01").tzinfo is not None

    @pytest.mark.parametrize("value", ["", "   ", "garbage", "Foo, 99 Bar 2024"])
    def test_unparseable_is_epoch(self, value) -> None:
        assert parse_publication_date(value) == EPOCH
