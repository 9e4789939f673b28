"""
Account Tools - API token management.

Tools:
- set_api_token: Validate and save the ADS API token
- clear_api_token: Forget the saved token
- get_token_status: Whether a token is configured
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from ads_search.application.workspace import Workspace

from ._common import error_message, failure, success

logger = logging.getLogger(__name__)


def register_account_tools(mcp: FastMCP, workspace: Workspace):
    """Register token management tools."""

    @mcp.tool()
    async def set_api_token(token: str) -> str:
        """
        Validate an ADS API token and save it for later requests.

        The token is checked with a one-row probe search before it is stored;
        a rejected token is not saved.

        Args:
            token: ADS API token (from the ADS user settings page)

        Returns:
            JSON with success flag
        """
        try:
            saved = await workspace.save_token(token)
        except Exception as e:
            return failure(e, "set_api_token")

        if not saved:
            return error_message("Invalid token - please check and try again", "set_api_token")
        return success(message="Token saved successfully")

    @mcp.tool()
    def clear_api_token() -> str:
        """Forget the saved ADS API token."""
        workspace.clear_token()
        return success(message="Token cleared")

    @mcp.tool()
    def get_token_status() -> str:
        """Report whether an ADS API token is configured."""
        return success(has_token=workspace.tokens.has_token())
