"""Bibliography management."""

from __future__ import annotations

from .store import (
    BibliographyStore,
    entry_from_result,
    now_ms,
    sorted_for_display,
)

__all__ = [
    "BibliographyStore",
    "entry_from_result",
    "now_ms",
    "sorted_for_display",
]
