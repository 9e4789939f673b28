"""
Application DI Container (dependency-injector).

Centralizes service creation and lifecycle management.

Usage::

    from ads_search.container import ApplicationContainer

    container = ApplicationContainer()
    container.config.from_dict({
        "base_url": "https://api.adsabs.harvard.edu/v1",
        "data_dir": "~/.ads-search-mcp",
        "page_size": 10,
    })

    workspace = container.workspace()

    # In tests, override any provider:
    container.storage.override(providers.Object(MemoryStorage()))
"""

from __future__ import annotations

import logging

from dependency_injector import containers, providers

logger = logging.getLogger(__name__)


def _create_storage(data_dir: str) -> object:
    """Lazy factory for JsonFileStorage."""
    from ads_search.infrastructure.storage import JsonFileStorage

    return JsonFileStorage(data_dir)


def _create_client(token_store: object, base_url: str | None, timeout: float | None) -> object:
    """ADS client reading the token from the token store on every request."""
    from ads_search.infrastructure.ads import DEFAULT_BASE_URL, ADSClient

    return ADSClient(
        token=token_store.get_token,  # type: ignore[attr-defined]
        base_url=base_url or DEFAULT_BASE_URL,
        timeout=timeout or ADSClient.DEFAULT_TIMEOUT,
    )


def _create_workspace(
    client: object,
    token_store: object,
    bibliography: object,
    page_size: int | None,
) -> object:
    from ads_search.application.search import DEFAULT_PAGE_SIZE
    from ads_search.application.workspace import Workspace

    return Workspace(
        client,  # type: ignore[arg-type]
        token_store,  # type: ignore[arg-type]
        bibliography,  # type: ignore[arg-type]
        page_size=int(page_size or DEFAULT_PAGE_SIZE),
    )


def _create_token_store(storage: object) -> object:
    from ads_search.infrastructure.storage import TokenStore

    return TokenStore(storage)  # type: ignore[arg-type]


def _create_bibliography(storage: object) -> object:
    from ads_search.application.bibliography import BibliographyStore

    return BibliographyStore(storage)  # type: ignore[arg-type]


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for ADS Search MCP.

    Manages creation and lifecycle of all core services:
    - ``storage``: key/value persistence for token and bibliography
    - ``token_store`` / ``bibliography``: views over storage
    - ``client``: ADS search/export API client
    - ``workspace``: per-process user workspace
    """

    config = providers.Configuration()

    storage = providers.Singleton(
        _create_storage,
        data_dir=config.data_dir,
    )

    token_store = providers.Singleton(_create_token_store, storage=storage)

    bibliography = providers.Singleton(_create_bibliography, storage=storage)

    client = providers.Singleton(
        _create_client,
        token_store=token_store,
        base_url=config.base_url,
        timeout=config.timeout,
    )

    workspace = providers.Singleton(
        _create_workspace,
        client=client,
        token_store=token_store,
        bibliography=bibliography,
        page_size=config.page_size,
    )


__all__ = ["ApplicationContainer"]
