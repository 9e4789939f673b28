"""
ADS Search MCP Server

This module provides a Model Context Protocol (MCP) server for searching the
NASA Astrophysics Data System and managing a personal bibliography.

Usage as standalone server:
    python -m ads_search.presentation.mcp_server

Or in mcp.json:
    {
        "servers": {
            "ads-search": {
                "type": "stdio",
                "command": "ads-search-mcp",
                "env": {"ADS_API_TOKEN": "..."}
            }
        }
    }

Usage for integration:
    from ads_search.presentation.mcp_server import create_server, register_all_tools

    server = create_server(api_token="...")
    server.run()
"""

from __future__ import annotations

from .server import create_server, main
from .tools import register_all_tools

__all__ = ["create_server", "main", "register_all_tools"]
