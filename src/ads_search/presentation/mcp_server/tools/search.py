"""
Search Tools - search, paging and paper details.

Tools:
- search_papers: Start a new search (replaces the previous result list)
- load_more_results: Next page of the current search
- reset_search: Clear results and pagination state
- get_paper_detail: Abstract, citations, DOI and affiliations (cached)
- toggle_paper_detail: Expand/collapse a result's detail view
- get_references: Papers referenced by a paper
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from ads_search.application.workspace import Workspace
from ads_search.domain.entities import SearchPage

from ._common import failure, format_detail, format_result, success

logger = logging.getLogger(__name__)


def _page_payload(workspace: Workspace, page: SearchPage) -> dict:
    saved = set(workspace.bibliography.bibcodes())
    return {
        "results": [format_result(doc, doc.bibcode in saved) for doc in page.docs],
        "returned": len(page.docs),
        "num_found": page.num_found,
        "has_more": page.has_more,
        "session": workspace.session.to_dict(),
    }


def register_search_tools(mcp: FastMCP, workspace: Workspace):
    """Register search and detail tools."""

    @mcp.tool()
    async def search_papers(query: str, rows: int | None = None) -> str:
        """
        Search the ADS bibliographic database.

        Starts a new result list; any previous search is discarded.
        Use load_more_results to page through further results.

        Args:
            query: ADS query (e.g., 'author:"Huchra, John" year:1990-2000',
                   'title:"dark energy"', 'bibcode:2019ApJ...882L..24A')
            rows: Page size (default: configured page size)

        Returns:
            JSON with results (bibcode, title, authors, year, publication,
            inline_citation), num_found and has_more
        """
        try:
            page = await workspace.search(query, rows)
        except Exception as e:
            return failure(e, "search_papers")

        if not page.docs:
            return success(message="No results found", **_page_payload(workspace, page))
        return success(**_page_payload(workspace, page))

    @mcp.tool()
    async def load_more_results(rows: int | None = None) -> str:
        """
        Load the next page of the current search.

        Fails with NoActiveQueryError before any search and with
        ExhaustedError once all results were delivered.

        Args:
            rows: Page size (default: configured page size)
        """
        try:
            page = await workspace.load_more(rows)
        except Exception as e:
            return failure(e, "load_more_results")
        return success(**_page_payload(workspace, page))

    @mcp.tool()
    def reset_search() -> str:
        """Clear the current results and pagination state."""
        workspace.reset()
        return success(session=workspace.session.to_dict())

    @mcp.tool()
    async def get_paper_detail(bibcode: str) -> str:
        """
        Get abstract, citation count, DOI and affiliations for a paper.

        Details are cached for the session; repeated calls make no request.

        Args:
            bibcode: ADS bibcode (e.g., "2019ApJ...882L..24A")
        """
        try:
            detail = await workspace.paper_detail(bibcode.strip())
        except Exception as e:
            return failure(e, "get_paper_detail")
        return success(paper=format_detail(detail, workspace.bibliography.contains(detail.bibcode)))

    @mcp.tool()
    async def toggle_paper_detail(bibcode: str) -> str:
        """
        Expand a result's detail view, or collapse it if already expanded.

        Expanding one result collapses any other.

        Args:
            bibcode: ADS bibcode
        """
        try:
            detail = await workspace.toggle_detail(bibcode.strip())
        except Exception as e:
            return failure(e, "toggle_paper_detail")

        if detail is None:
            return success(expanded=workspace.session.expanded)
        return success(
            expanded=workspace.session.expanded,
            paper=format_detail(detail, workspace.bibliography.contains(detail.bibcode)),
        )

    @mcp.tool()
    async def get_references(bibcode: str, rows: int = 25) -> str:
        """
        List papers referenced by a paper.

        Args:
            bibcode: ADS bibcode of the citing paper
            rows: Maximum references to return (default: 25)
        """
        try:
            refs = await workspace.references(bibcode.strip(), rows=rows)
        except Exception as e:
            return failure(e, "get_references")

        saved = set(workspace.bibliography.bibcodes())
        return success(
            bibcode=bibcode.strip(),
            references=[format_result(ref, ref.bibcode in saved) for ref in refs],
            total=len(refs),
        )
