"""Tests for application/workspace.py - the per-user facade."""

import pytest
from conftest import make_page

from ads_search.application.citation import CitationStyle
from ads_search.domain.entities import BibliographyEntry
from ads_search.shared.exceptions import (
    ExhaustedError,
    MissingTokenError,
    NoActiveQueryError,
    ValidationError,
)


class TestToken:
    @pytest.mark.asyncio
    async def test_save_valid_token(self, workspace, mock_client):
        assert await workspace.save_token("  new-token ") is True
        mock_client.validate_token.assert_awaited_once_with("new-token")
        assert workspace.tokens.get_token() == "new-token"

    @pytest.mark.asyncio
    async def test_rejected_token_not_saved(self, workspace, mock_client):
        mock_client.validate_token.return_value = False
        assert await workspace.save_token("bad") is False
        assert workspace.tokens.get_token() == "test-token"

    @pytest.mark.asyncio
    async def test_empty_token(self, workspace, mock_client):
        with pytest.raises(ValidationError, match="Please enter a token"):
            await workspace.save_token("   ")
        mock_client.validate_token.assert_not_called()

    def test_clear_token(self, workspace):
        workspace.clear_token()
        assert not workspace.tokens.has_token()


class TestSearch:
    @pytest.mark.asyncio
    async def test_search_and_load_more(self, workspace, mock_client):
        page = await workspace.search("author:Huchra")
        assert workspace.session.query == "author:Huchra"
        assert workspace.known_result(page.docs[0].bibcode) is page.docs[0]

        mock_client.search.return_value = make_page(["2020ApJ...2B"], "cursor-1")
        more = await workspace.load_more()
        assert more.next_cursor is None
        assert workspace.known_result("2020ApJ...2B") is not None
        with pytest.raises(ExhaustedError):
            await workspace.load_more()

    @pytest.mark.asyncio
    async def test_new_search_replaces_known_results(self, workspace, mock_client):
        await workspace.search("first")
        mock_client.search.return_value = make_page(["OTHER"], None)
        await workspace.search("second")
        assert workspace.known_result("2020ApJ...1A") is None
        assert workspace.known_result("OTHER") is not None

    @pytest.mark.asyncio
    async def test_reset(self, workspace):
        await workspace.search("q")
        workspace.reset()
        assert workspace.known_result("2020ApJ...1A") is None
        with pytest.raises(NoActiveQueryError):
            await workspace.load_more()

    @pytest.mark.asyncio
    async def test_missing_token_propagates(self, workspace, mock_client):
        mock_client.search.side_effect = MissingTokenError()
        with pytest.raises(MissingTokenError):
            await workspace.search("q")


class TestDetailView:
    @pytest.mark.asyncio
    async def test_toggle_expand_and_collapse(self, workspace, mock_client, sample_detail):
        bibcode = sample_detail.bibcode
        assert await workspace.toggle_detail(bibcode) is sample_detail
        assert workspace.session.expanded == bibcode

        assert await workspace.toggle_detail(bibcode) is None
        assert workspace.session.expanded is None

        # Re-expanding uses the cache
        assert await workspace.toggle_detail(bibcode) is sample_detail
        mock_client.fetch_paper_detail.assert_awaited_once_with(bibcode)

    @pytest.mark.asyncio
    async def test_expanding_another_collapses_previous(self, workspace, sample_detail):
        await workspace.toggle_detail("OTHER")
        await workspace.toggle_detail(sample_detail.bibcode)
        assert workspace.session.expanded == sample_detail.bibcode

    @pytest.mark.asyncio
    async def test_stale_detail_is_cached_not_returned(self, workspace, mock_client, sample_detail):
        async def fetch_while_user_moves_on(bibcode):
            workspace.session.expanded = "SOMETHING-ELSE"
            return sample_detail

        mock_client.fetch_paper_detail.side_effect = fetch_while_user_moves_on

        assert await workspace.toggle_detail(sample_detail.bibcode) is None
        assert workspace.session.expanded == "SOMETHING-ELSE"
        assert workspace.details.peek(sample_detail.bibcode) is sample_detail

    @pytest.mark.asyncio
    async def test_references_become_known(self, workspace, mock_client):
        refs = await workspace.references("2019ApJ...882L..24A", rows=10)
        mock_client.fetch_references.assert_awaited_once_with("2019ApJ...882L..24A", rows=10)
        assert workspace.known_result(refs[0].bibcode) is refs[0]


class TestCitations:
    @pytest.mark.asyncio
    async def test_inline_for_known_result(self, workspace, mock_client):
        await workspace.search("q")
        assert await workspace.citation_text("2020ApJ...1A") == "Smith (2020)"
        mock_client.fetch_paper_detail.assert_not_called()

    @pytest.mark.asyncio
    async def test_selected_style(self, workspace, mock_client, sample_result):
        assert workspace.select_citation_style("bibtex") is CitationStyle.BIBTEX
        text = await workspace.citation_text(sample_result)
        assert text.startswith("@ARTICLE")
        mock_client.export.assert_awaited_once_with([sample_result.bibcode], "bibtex")

    @pytest.mark.asyncio
    async def test_unknown_bibcode_fetches_detail(self, workspace, mock_client, sample_detail):
        assert await workspace.citation_text(sample_detail.bibcode) == "Akiyama et al. (2019)"
        mock_client.fetch_paper_detail.assert_awaited_once()


class TestBibliography:
    @pytest.mark.asyncio
    async def test_add_known_result(self, workspace, mock_client):
        await workspace.search("q")
        assert await workspace.add_to_bibliography("2020ApJ...1A") is True
        assert await workspace.add_to_bibliography("2020ApJ...1A") is False
        assert workspace.bibliography.count() == 1
        mock_client.fetch_paper_detail.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_unknown_bibcode_fetches(self, workspace, sample_detail):
        assert await workspace.add_to_bibliography(sample_detail.bibcode) is True
        entry = workspace.bibliography.list()[0]
        assert entry.title == "First M87 Event Horizon Telescope Results"

    @pytest.mark.asyncio
    async def test_remove_and_clear(self, workspace, sample_result):
        await workspace.add_to_bibliography(sample_result)
        workspace.remove_from_bibliography(sample_result.bibcode)
        workspace.remove_from_bibliography(sample_result.bibcode)
        assert workspace.bibliography.count() == 0

        await workspace.add_to_bibliography(sample_result)
        workspace.clear_bibliography()
        assert workspace.bibliography_entries() == []

    def test_entries_newest_first(self, workspace):
        for code, ts in (("old", 1), ("new", 3), ("mid", 2)):
            workspace.bibliography.add(BibliographyEntry(bibcode=code, title="", authors="", year="", added_at=ts))
        assert [e.bibcode for e in workspace.bibliography_entries()] == ["new", "mid", "old"]


class TestExport:
    @pytest.mark.asyncio
    async def test_export_bibliography(self, workspace, mock_client, sample_result):
        await workspace.add_to_bibliography(sample_result)
        result = await workspace.export_bibliography("bibtex")
        assert result.count == 1
        mock_client.export.assert_awaited_once_with([sample_result.bibcode], "bibtex")

    @pytest.mark.asyncio
    async def test_export_formats_cached_until_refresh(self, workspace, mock_client):
        formats = await workspace.export_formats()
        assert [f.key for f in formats] == ["apsj", "bibtex"]

        await workspace.export_formats()
        assert mock_client.manifest.await_count == 1
        await workspace.export_formats(refresh=True)
        assert mock_client.manifest.await_count == 2

    @pytest.mark.asyncio
    async def test_close(self, workspace, mock_client):
        await workspace.close()
        mock_client.close.assert_awaited_once()
