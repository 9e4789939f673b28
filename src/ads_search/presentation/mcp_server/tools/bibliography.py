"""
Bibliography Tools - the saved-paper collection and its export.

Tools:
- add_to_bibliography / remove_from_bibliography / list_bibliography
- clear_bibliography: Requires confirm=True
- list_export_formats: Export formats grouped by type
- export_bibliography: All saved papers rendered in one format
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from ads_search.application.export import default_format, group_formats
from ads_search.application.workspace import Workspace

from ._common import error_message, failure, success

logger = logging.getLogger(__name__)


def register_bibliography_tools(mcp: FastMCP, workspace: Workspace):
    """Register bibliography and export tools."""

    @mcp.tool()
    async def add_to_bibliography(bibcode: str) -> str:
        """
        Save a paper to the bibliography.

        Adding a paper that is already saved changes nothing.

        Args:
            bibcode: ADS bibcode (from search results, references or details)
        """
        try:
            added = await workspace.add_to_bibliography(bibcode.strip())
        except Exception as e:
            return failure(e, "add_to_bibliography")
        return success(
            added=added,
            message="Added to bibliography" if added else "Already in bibliography",
            count=workspace.bibliography.count(),
        )

    @mcp.tool()
    def remove_from_bibliography(bibcode: str) -> str:
        """Remove a paper from the bibliography (no-op if absent)."""
        workspace.remove_from_bibliography(bibcode.strip())
        return success(count=workspace.bibliography.count())

    @mcp.tool()
    def list_bibliography() -> str:
        """List saved papers, most recently added first."""
        entries = workspace.bibliography_entries()
        return success(entries=[e.to_dict() for e in entries], count=len(entries))

    @mcp.tool()
    def clear_bibliography(confirm: bool = False) -> str:
        """
        Remove all papers from the bibliography.

        Args:
            confirm: Must be True; guards against accidental clearing
        """
        if not confirm:
            return error_message(
                "Clearing the bibliography requires confirm=True",
                "clear_bibliography",
                count=workspace.bibliography.count(),
            )
        workspace.clear_bibliography()
        return success(message="Bibliography cleared", count=0)

    @mcp.tool()
    async def list_export_formats(refresh: bool = False) -> str:
        """
        Export formats available for export_bibliography, grouped by type.

        Args:
            refresh: Re-fetch the manifest instead of using the cached copy
        """
        try:
            formats = await workspace.export_formats(refresh=refresh)
        except Exception as e:
            return failure(e, "list_export_formats")

        groups = group_formats(formats)
        return success(
            groups=[g.to_dict() for g in groups],
            default_format=default_format(formats),
        )

    @mcp.tool()
    async def export_bibliography(format: str | None = None) -> str:
        """
        Render every saved paper in one citation format.

        Args:
            format: Export format key from list_export_formats
                    (e.g., "apsj", "bibtex", "aastex", "ris"; default: "apsj")

        Returns:
            JSON with export_text covering all saved papers
        """
        try:
            result = await workspace.export_bibliography(format)
        except Exception as e:
            return failure(e, "export_bibliography")
        return success(
            format=result.format,
            article_count=result.count,
            export_text=result.content,
        )
