"""
ADS Search - NASA Astrophysics Data System search and bibliography toolkit.

Usage:
    from ads_search import ADSClient, Workspace, TokenStore, BibliographyStore
    from ads_search.infrastructure.storage import JsonFileStorage

    storage = JsonFileStorage("~/.ads-search-mcp")
    tokens = TokenStore(storage)
    async with ADSClient(token=tokens.get_token) as client:
        workspace = Workspace(client, tokens, BibliographyStore(storage))
        page = await workspace.search('author:"Huchra, John"')

Features:
    - Cursor-paged search with exhaustion detection and stale-response fencing
    - Session cache of paper details with concurrent fetch coalescing
    - Inline citations rendered locally; full and BibTeX via remote export
    - Persistent bibliography with bulk export
"""

from __future__ import annotations

from .application.bibliography import BibliographyStore
from .application.workspace import Workspace
from .domain.entities import BibliographyEntry, ExportFormatInfo, PaperDetail, SearchPage, SearchResult
from .infrastructure.ads import ADSClient
from .infrastructure.storage import JsonFileStorage, MemoryStorage, TokenStore
from .shared.exceptions import AdsSearchError

__version__ = "0.1.0"

__all__ = [
    "ADSClient",
    "Workspace",
    "BibliographyStore",
    "TokenStore",
    "JsonFileStorage",
    "MemoryStorage",
    "SearchResult",
    "PaperDetail",
    "SearchPage",
    "BibliographyEntry",
    "ExportFormatInfo",
    "AdsSearchError",
    "__version__",
]
