"""
Workspace - one user's search, detail, citation and bibliography state.

Binds the application services together the way an interactive client uses
them: a search session with load-more, an expandable detail view backed by
the detail cache, citation rendering in the selected style, and the saved
bibliography with bulk export.

Stale responses are fenced rather than prevented: a search superseded by a
newer one raises StaleResponseError, and a detail that resolves after the
expanded view moved elsewhere is cached but not returned for display.
"""

from __future__ import annotations

import logging

from ads_search.application.bibliography import (
    BibliographyStore,
    entry_from_result,
    sorted_for_display,
)
from ads_search.application.citation import CitationService, CitationStyle
from ads_search.application.export import ExportResult, ExportService
from ads_search.application.search import DEFAULT_PAGE_SIZE, PaginationController, SearchSession
from ads_search.domain.entities import (
    BibliographyEntry,
    ExportFormatInfo,
    PaperDetail,
    SearchPage,
    SearchResult,
)
from ads_search.infrastructure.ads import ADSClient
from ads_search.infrastructure.cache import DetailCache
from ads_search.infrastructure.storage import TokenStore
from ads_search.shared.exceptions import ValidationError

logger = logging.getLogger(__name__)


class Workspace:
    """
    Facade over the application services for a single user.

    Example:
        workspace = Workspace(client, TokenStore(storage), BibliographyStore(storage))

        page = await workspace.search("author:Huchra year:1990")
        detail = await workspace.toggle_detail(page.docs[0].bibcode)
        await workspace.add_to_bibliography(page.docs[0].bibcode)
        result = await workspace.export_bibliography("bibtex")
    """

    def __init__(
        self,
        client: ADSClient,
        token_store: TokenStore,
        bibliography: BibliographyStore,
        page_size: int = DEFAULT_PAGE_SIZE,
        session: SearchSession | None = None,
    ):
        self._client = client
        self.tokens = token_store
        self.bibliography = bibliography
        self.session = session or SearchSession()
        self.pagination = PaginationController(client, page_size=page_size)
        self.details = DetailCache(client.fetch_paper_detail)
        self.citations = CitationService(client)
        self.exports = ExportService(client, bibliography)
        self._results: dict[str, SearchResult] = {}

    # ==================== Token ====================

    async def save_token(self, token: str) -> bool:
        """
        Validate ``token`` against the API and persist it if accepted.

        Returns:
            True if the token was accepted and saved
        """
        token = (token or "").strip()
        if not token:
            raise ValidationError("Please enter a token")
        if not await self._client.validate_token(token):
            return False
        self.tokens.set_token(token)
        logger.info("API token saved")
        return True

    def clear_token(self) -> None:
        self.tokens.clear_token()

    # ==================== Search ====================

    async def search(self, query: str, page_size: int | None = None) -> SearchPage:
        """Start a new search; see PaginationController.search."""
        page = await self.pagination.search(self.session, query, page_size)
        self._results = {doc.bibcode: doc for doc in page.docs}
        return page

    async def load_more(self, page_size: int | None = None) -> SearchPage:
        """Fetch the next page; see PaginationController.load_more."""
        page = await self.pagination.load_more(self.session, page_size)
        for doc in page.docs:
            self._results.setdefault(doc.bibcode, doc)
        return page

    def reset(self) -> None:
        """Clear results and pagination state."""
        self.pagination.reset(self.session)
        self._results.clear()

    def known_result(self, bibcode: str) -> SearchResult | None:
        """A result seen in this session, preferring the fetched detail."""
        return self.details.peek(bibcode) or self._results.get(bibcode)

    async def _resolve(self, item: SearchResult | str) -> SearchResult:
        if isinstance(item, SearchResult):
            return item
        return self.known_result(item) or await self.details.get(item)

    # ==================== Detail view ====================

    async def paper_detail(self, bibcode: str) -> PaperDetail:
        """Detail for ``bibcode`` from the cache, fetching on first use."""
        return await self.details.get(bibcode)

    async def toggle_detail(self, bibcode: str) -> PaperDetail | None:
        """
        Expand or collapse the detail view of ``bibcode``.

        Expanding another result collapses the previous one.

        Returns:
            The detail to display, or None when the view was collapsed or
            another result was expanded before the fetch resolved
        """
        if self.session.expanded == bibcode:
            self.session.expanded = None
            return None

        self.session.expanded = bibcode
        detail = await self.details.get(bibcode)
        if self.session.expanded != bibcode:
            logger.debug(f"Detail for {bibcode} resolved after the view moved on")
            return None
        return detail

    async def references(self, bibcode: str, rows: int = 25) -> list[SearchResult]:
        refs = await self._client.fetch_references(bibcode, rows=rows)
        for ref in refs:
            self._results.setdefault(ref.bibcode, ref)
        return refs

    # ==================== Citations ====================

    def select_citation_style(self, style: str | CitationStyle) -> CitationStyle:
        return self.citations.select_style(style)

    async def citation_text(
        self,
        item: SearchResult | str,
        style: str | CitationStyle | None = None,
    ) -> str:
        return await self.citations.citation_text(await self._resolve(item), style)

    # ==================== Bibliography ====================

    async def add_to_bibliography(self, item: SearchResult | str) -> bool:
        """
        Save a result (or a bibcode, fetching its detail if unseen).

        Returns:
            False if it was already saved
        """
        result = await self._resolve(item)
        return self.bibliography.add(entry_from_result(result))

    def remove_from_bibliography(self, bibcode: str) -> None:
        self.bibliography.remove(bibcode)

    def clear_bibliography(self) -> None:
        self.bibliography.clear()

    def bibliography_entries(self) -> list[BibliographyEntry]:
        """Saved entries, most recent first."""
        return sorted_for_display(self.bibliography.list())

    async def export_formats(self, refresh: bool = False) -> list[ExportFormatInfo]:
        """Formats offered for export, from the cached manifest."""
        return await self.exports.available_formats(refresh=refresh)

    async def export_bibliography(self, format: str | None = None) -> ExportResult:
        return await self.exports.export_bibliography(format)

    async def close(self) -> None:
        await self._client.close()
