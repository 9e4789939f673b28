"""
ADS Search MCP Tools

Account (3):
- set_api_token, clear_api_token, get_token_status

Search (6):
- search_papers, load_more_results, reset_search
- get_paper_detail, toggle_paper_detail, get_references

Citation (2):
- set_citation_style, format_citation

Bibliography & export (6):
- add_to_bibliography, remove_from_bibliography, list_bibliography, clear_bibliography
- list_export_formats, export_bibliography

Usage:
    from .tools import register_all_tools
    register_all_tools(mcp, workspace)
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from ads_search.application.workspace import Workspace

from .account import register_account_tools
from .bibliography import register_bibliography_tools
from .citation import register_citation_tools
from .search import register_search_tools

logger = logging.getLogger(__name__)

TOOL_CATEGORIES = {
    "account": ["set_api_token", "clear_api_token", "get_token_status"],
    "search": [
        "search_papers",
        "load_more_results",
        "reset_search",
        "get_paper_detail",
        "toggle_paper_detail",
        "get_references",
    ],
    "citation": ["set_citation_style", "format_citation"],
    "bibliography": [
        "add_to_bibliography",
        "remove_from_bibliography",
        "list_bibliography",
        "clear_bibliography",
        "list_export_formats",
        "export_bibliography",
    ],
}


def register_all_tools(mcp: FastMCP, workspace: Workspace) -> dict[str, int]:
    """
    Register every ADS Search tool on ``mcp``.

    Returns:
        Number of tools registered per category
    """
    register_account_tools(mcp, workspace)
    register_search_tools(mcp, workspace)
    register_citation_tools(mcp, workspace)
    register_bibliography_tools(mcp, workspace)

    stats = {category: len(names) for category, names in TOOL_CATEGORIES.items()}
    logger.info(f"Registered {sum(stats.values())} tools: {stats}")
    return stats


__all__ = [
    "TOOL_CATEGORIES",
    "register_all_tools",
    "register_account_tools",
    "register_search_tools",
    "register_citation_tools",
    "register_bibliography_tools",
]
