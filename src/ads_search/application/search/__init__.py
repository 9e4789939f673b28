"""Search pagination."""

from __future__ import annotations

from .pagination import (
    DEFAULT_PAGE_SIZE,
    PaginationController,
    SearchBackend,
    SearchSession,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "PaginationController",
    "SearchBackend",
    "SearchSession",
]
