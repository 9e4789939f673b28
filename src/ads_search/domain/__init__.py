"""
Domain Layer - Core business entities.
"""

from __future__ import annotations

from .entities import (
    BibliographyEntry,
    ExportFormatInfo,
    PaperDetail,
    SearchPage,
    SearchResult,
)

__all__ = [
    "SearchResult",
    "PaperDetail",
    "SearchPage",
    "BibliographyEntry",
    "ExportFormatInfo",
]
