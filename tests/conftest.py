"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from ads_search.application.bibliography import BibliographyStore
from ads_search.application.workspace import Workspace
from ads_search.domain.entities import ExportFormatInfo, PaperDetail, SearchPage, SearchResult
from ads_search.infrastructure.storage import MemoryStorage, TokenStore

# ============================================================
# Mock ADS API Responses
# ============================================================


@pytest.fixture
def mock_doc():
    """One docs[] item from /search/query."""
    return {
        "bibcode": "2019ApJ...882L..24A",
        "title": ["First M87 Event Horizon Telescope Results"],
        "author": ["Akiyama, Kazunori", "Alberdi, Antxon", "Alef, Walter"],
        "year": "2019",
        "pub": "The Astrophysical Journal",
    }


@pytest.fixture
def mock_detail_doc(mock_doc):
    """docs[] item requested with the detail field set."""
    return {
        **mock_doc,
        "abstract": "We present measurements of the properties of the central radio source in M87.",
        "citation_count": 1234,
        "doi": ["10.3847/2041-8213/ab0ec7"],
        "aff": ["Haystack Observatory", "-", "Instituto de Astrofísica de Andalucía", "Haystack Observatory"],
    }


@pytest.fixture
def mock_search_response(mock_doc):
    """Full /search/query response body."""
    return {
        "responseHeader": {"status": 0, "QTime": 12},
        "response": {"numFound": 42, "start": 0, "docs": [mock_doc]},
        "nextCursorMark": "AoE/E2019ApJ...882L..24A",
    }


@pytest.fixture
def mock_manifest():
    """/export/manifest response body."""
    return [
        {"name": "BibTeX", "type": "tagged", "route": "/bibtex", "extension": "bib"},
        {"name": "APS Journals", "type": "HTML", "route": "/apsj", "extension": "html"},
        {"name": "AASTeX", "type": "LaTeX", "route": "/aastex", "extension": "tex"},
        {"name": "Dublin Core XML", "type": "XML", "route": "/dcxml", "extension": "xml"},
        {"name": "Custom Format", "type": "custom", "route": "/custom", "extension": "txt"},
        {"name": "RIS", "type": "tagged", "route": "/ris", "extension": "ris"},
    ]


# ============================================================
# Domain Fixtures
# ============================================================


@pytest.fixture
def sample_result(mock_doc):
    return SearchResult.from_doc(mock_doc)


@pytest.fixture
def sample_detail(mock_detail_doc):
    return PaperDetail.from_doc(mock_detail_doc)


def make_result(bibcode: str, author: tuple[str, ...] = ("Smith, J.",), year: str | None = "2020") -> SearchResult:
    return SearchResult(bibcode=bibcode, title=(f"Paper {bibcode}",), author=author, year=year, pub="ApJ")


def make_page(bibcodes: list[str], next_cursor: str | None, num_found: int | None = None) -> SearchPage:
    return SearchPage(
        docs=[make_result(b) for b in bibcodes],
        next_cursor=next_cursor,
        num_found=len(bibcodes) if num_found is None else num_found,
    )


# ============================================================
# Infrastructure Fixtures
# ============================================================


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def token_store(storage):
    store = TokenStore(storage)
    store.set_token("test-token")
    return store


@pytest.fixture
def bibliography(storage):
    return BibliographyStore(storage)


@pytest.fixture
def mock_client(sample_detail):
    """AsyncMock standing in for ADSClient."""
    client = MagicMock()
    client.search = AsyncMock(return_value=make_page(["2020ApJ...1A"], "cursor-1", num_found=3))
    client.fetch_paper_detail = AsyncMock(return_value=sample_detail)
    client.fetch_references = AsyncMock(return_value=[make_result("1990ApJ...1R"), make_result("1991ApJ...2R")])
    client.validate_token = AsyncMock(return_value=True)
    client.export = AsyncMock(return_value="@ARTICLE{2019ApJ...882L..24A}")
    client.manifest = AsyncMock(
        return_value=[
            ExportFormatInfo(name="APS Journals", type="HTML", route="/apsj"),
            ExportFormatInfo(name="BibTeX", type="tagged", route="/bibtex"),
        ]
    )
    client.close = AsyncMock()
    return client


@pytest.fixture
def workspace(mock_client, token_store, bibliography):
    return Workspace(mock_client, token_store, bibliography, page_size=10)
