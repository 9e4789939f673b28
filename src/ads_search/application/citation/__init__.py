"""Citation formatting."""

from __future__ import annotations

from .formatter import (
    NO_DATE,
    ResultSummary,
    extract_last_name,
    format_authors,
    format_inline,
    format_summary,
)
from .service import (
    EXPORT_FORMAT_FOR_STYLE,
    CitationService,
    CitationStyle,
    ExportGateway,
)

__all__ = [
    "NO_DATE",
    "ResultSummary",
    "extract_last_name",
    "format_authors",
    "format_inline",
    "format_summary",
    "CitationService",
    "CitationStyle",
    "ExportGateway",
    "EXPORT_FORMAT_FOR_STYLE",
]
