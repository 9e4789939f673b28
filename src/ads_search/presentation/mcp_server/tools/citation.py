"""
Citation Tools.

Tools:
- set_citation_style: Select the default style (inline, full, bibtex)
- format_citation: Citation text for one paper
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from ads_search.application.citation import CitationStyle
from ads_search.application.workspace import Workspace

from ._common import failure, success

logger = logging.getLogger(__name__)


def register_citation_tools(mcp: FastMCP, workspace: Workspace):
    """Register citation formatting tools."""

    @mcp.tool()
    def set_citation_style(style: str) -> str:
        """
        Select the citation style used by format_citation.

        Args:
            style: "inline" (e.g. "Smith et al. (2021)", rendered locally),
                   "full" (APS Journals style) or "bibtex"
        """
        try:
            selected = workspace.select_citation_style(style)
        except Exception as e:
            return failure(e, "set_citation_style")
        return success(style=selected.value)

    @mcp.tool()
    async def format_citation(bibcode: str, style: str | None = None) -> str:
        """
        Citation text for a paper, ready to paste into a document.

        Args:
            bibcode: ADS bibcode
            style: Override the selected style for this call
        """
        try:
            selected = CitationStyle.parse(style) if style is not None else workspace.citations.style
            text = await workspace.citation_text(bibcode.strip(), selected)
        except Exception as e:
            return failure(e, "format_citation")
        return success(
            bibcode=bibcode.strip(),
            style=selected.value,
            citation=text,
        )
