"""
Cursor Pagination - search sessions over a cursor-paginated search API.

The continuation token is opaque. The only comparison made on it is equality
with the token just sent: the API echoes the last token back instead of
omitting it at end-of-results, so an echo means the session is exhausted.

Session state lives in an explicit SearchSession passed to every call.
Each request records the session generation it was issued under; a response
that arrives after the session moved on (new search, reset, or another page
already committed) is rejected with StaleResponseError and leaves the
session untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from ads_search.domain.entities import SearchPage
from ads_search.infrastructure.ads import INITIAL_CURSOR
from ads_search.shared.exceptions import (
    ExhaustedError,
    InvalidQueryError,
    NoActiveQueryError,
    StaleResponseError,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class SearchBackend(Protocol):
    """Cursor-paginated search collaborator."""

    async def search(self, query: str, *, rows: int = ..., cursor: str | None = ...) -> SearchPage: ...


@dataclass
class SearchSession:
    """
    Pagination state for one user's result list.

    Attributes:
        query: Active query, None before the first search or after reset
        cursor: Token for the next page, None when exhausted
        num_found: Total hits reported for the active query
        loaded: Number of documents delivered for the active query
        generation: Request fence, bumped by every new search and reset
        expanded: Bibcode whose detail view is open, if any
    """

    query: str | None = None
    cursor: str | None = None
    num_found: int = 0
    loaded: int = 0
    generation: int = 0
    expanded: str | None = None

    @property
    def active(self) -> bool:
        return self.query is not None

    @property
    def has_more(self) -> bool:
        return self.query is not None and self.cursor is not None

    def reset(self) -> None:
        """Drop the active query and fence any in-flight request."""
        self.query = None
        self.cursor = None
        self.num_found = 0
        self.loaded = 0
        self.expanded = None
        self.generation += 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "has_more": self.has_more,
            "num_found": self.num_found,
            "loaded": self.loaded,
            "expanded": self.expanded,
        }


class PaginationController:
    """
    Drives search and load-more requests for a SearchSession.

    The controller holds no session state of its own, so one controller can
    serve any number of sessions.

    Example:
        controller = PaginationController(client)
        session = SearchSession()

        page = await controller.search(session, "author:Huchra")
        while session.has_more:
            page = await controller.load_more(session)
    """

    def __init__(self, backend: SearchBackend, page_size: int = DEFAULT_PAGE_SIZE):
        self._backend = backend
        self.page_size = page_size

    @staticmethod
    def _settle(raw: SearchPage, sent: str) -> SearchPage:
        next_cursor = raw.next_cursor
        if not next_cursor or next_cursor == sent:
            next_cursor = None
        return SearchPage(docs=list(raw.docs), next_cursor=next_cursor, num_found=raw.num_found)

    async def search(
        self,
        session: SearchSession,
        query: str,
        page_size: int | None = None,
    ) -> SearchPage:
        """
        Start a fresh search, superseding any previous query in the session.

        Returns:
            First page; next_cursor is None if the results are exhausted

        Raises:
            InvalidQueryError: Empty query
            StaleResponseError: The session was superseded while this request ran
            UnauthorizedError / RemoteError / NetworkError: From the backend; the
                session keeps its previous query and cursor
        """
        query = (query or "").strip()
        if not query:
            raise InvalidQueryError(query)

        session.generation += 1
        generation = session.generation
        rows = page_size or self.page_size

        logger.info(f"Searching {query!r} (rows={rows})")
        raw = await self._backend.search(query, rows=rows, cursor=INITIAL_CURSOR)

        if session.generation != generation:
            logger.warning(f"Dropping stale response for {query!r}")
            raise StaleResponseError()

        page = self._settle(raw, INITIAL_CURSOR)
        session.query = query
        session.cursor = page.next_cursor
        session.num_found = page.num_found
        session.loaded = len(page.docs)
        session.expanded = None
        return page

    async def load_more(
        self,
        session: SearchSession,
        page_size: int | None = None,
    ) -> SearchPage:
        """
        Fetch the next page of the active query.

        Raises:
            NoActiveQueryError: No search has run in this session
            ExhaustedError: The session holds no continuation token
            StaleResponseError: The session moved on while this request ran
            UnauthorizedError / RemoteError / NetworkError: From the backend; the
                session is unchanged and the call can be retried
        """
        if session.query is None:
            raise NoActiveQueryError()
        if session.cursor is None:
            raise ExhaustedError()

        generation = session.generation
        query = session.query
        sent = session.cursor
        rows = page_size or self.page_size

        raw = await self._backend.search(query, rows=rows, cursor=sent)

        if session.generation != generation or session.cursor != sent:
            logger.warning(f"Dropping stale page for {query!r}")
            raise StaleResponseError()

        page = self._settle(raw, sent)
        session.cursor = page.next_cursor
        session.num_found = page.num_found
        session.loaded += len(page.docs)
        return page

    def reset(self, session: SearchSession) -> None:
        session.reset()
