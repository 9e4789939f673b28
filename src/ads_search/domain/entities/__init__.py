"""
Domain Entities

Core business objects for bibliographic search.
"""

from __future__ import annotations

from .bibliography import BibliographyEntry
from .export_format import ExportFormatInfo
from .paper import PaperDetail, SearchPage, SearchResult

__all__ = [
    # Search entities
    "SearchResult",
    "PaperDetail",
    "SearchPage",
    # Bibliography
    "BibliographyEntry",
    # Export
    "ExportFormatInfo",
]
