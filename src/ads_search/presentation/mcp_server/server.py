"""
ADS Search MCP Server

A standalone Model Context Protocol server for the NASA Astrophysics Data System.

Features:
- Cursor-paged search with load-more
- Paper details cached per session
- Inline, full and BibTeX citations
- Persistent bibliography with bulk export

Architecture:
- instructions.py: SERVER_INSTRUCTIONS for AI agents
- tools/: Tool implementations by category
- container: DI container (dependency-injector) for service lifecycle
"""

from __future__ import annotations

import logging
import os
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from mcp.server.fastmcp import FastMCP

from ads_search.container import ApplicationContainer
from ads_search.infrastructure.ads import DEFAULT_BASE_URL

from .instructions import SERVER_INSTRUCTIONS
from .tools import register_all_tools

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from ads_search.application.workspace import Workspace

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = str(Path.home() / ".ads-search-mcp")
DEFAULT_PAGE_SIZE = 10

# ── Module-level DI container ──────────────────────────────────────────────
_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """Get the application DI container.

    Raises:
        RuntimeError: If ``create_server()`` has not been called yet.
    """
    if _container is None:
        msg = "Container not initialized. Call create_server() first."
        raise RuntimeError(msg)
    return _container


def _make_lifespan(
    workspace: Workspace,
) -> Callable[[FastMCP[Any]], AbstractAsyncContextManager[Workspace]]:
    """Create a FastMCP lifespan handler bound to *workspace*."""

    @asynccontextmanager
    async def _lifespan(server: FastMCP[Any]) -> AsyncIterator[Workspace]:
        logger.info("Lifecycle: startup")
        try:
            yield workspace
        finally:
            await workspace.close()
            logger.info("Lifecycle: shutdown - HTTP client closed")

    return _lifespan


def create_server(
    api_token: str | None = None,
    base_url: str = DEFAULT_BASE_URL,
    data_dir: str | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    name: str = "ads-search",
) -> FastMCP:
    """
    Create and configure the ADS Search MCP server.

    Args:
        api_token: ADS API token; saved to storage when given. Otherwise the
            previously saved token is used, or set later with set_api_token.
        base_url: ADS API base URL.
        data_dir: Directory for token and bibliography persistence.
            Default: ~/.ads-search-mcp
        page_size: Results per search page.
        name: Server name.

    Returns:
        Configured FastMCP server instance.
    """
    global _container

    logger.info("Initializing ADS Search MCP Server...")

    _container = ApplicationContainer()
    _container.config.from_dict(
        {
            "base_url": base_url,
            "data_dir": data_dir or DEFAULT_DATA_DIR,
            "page_size": page_size,
        }
    )

    if api_token:
        _container.token_store().set_token(api_token)
        logger.info("Using API token from configuration")

    workspace = cast("Workspace", _container.workspace())
    logger.info("Data directory: %s", data_dir or DEFAULT_DATA_DIR)

    mcp = FastMCP(
        name,
        instructions=SERVER_INSTRUCTIONS,
        lifespan=_make_lifespan(workspace),
    )

    stats = register_all_tools(mcp, workspace)
    logger.info("Tool registration complete: %s", stats)

    logger.info("ADS Search MCP Server initialized successfully")
    return mcp


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def main():
    """Run the MCP server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    server = create_server(
        api_token=os.environ.get("ADS_API_TOKEN", "").strip() or None,
        base_url=os.environ.get("ADS_API_BASE_URL", "").strip() or DEFAULT_BASE_URL,
        data_dir=os.environ.get("ADS_DATA_DIR", "").strip() or None,
        page_size=_env_int("ADS_PAGE_SIZE", DEFAULT_PAGE_SIZE),
    )

    # Run stdio MCP server (blocks)
    server.run()


if __name__ == "__main__":
    main()
