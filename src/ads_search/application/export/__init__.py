"""
Export Module - citation export for saved papers.

Provides:
- Export format discovery from the remote manifest
- Format filtering and grouping for presentation
- Bulk export of the bibliography
"""

from __future__ import annotations

from .service import (
    DEFAULT_EXPORT_FORMAT,
    EXCLUDED_TYPES,
    FALLBACK_FORMATS,
    TYPE_ORDER,
    ExportResult,
    ExportService,
    FormatGroup,
    default_format,
    group_formats,
    useful_formats,
)

__all__ = [
    "ExportService",
    "ExportResult",
    "FormatGroup",
    "group_formats",
    "useful_formats",
    "default_format",
    "DEFAULT_EXPORT_FORMAT",
    "EXCLUDED_TYPES",
    "FALLBACK_FORMATS",
    "TYPE_ORDER",
]
