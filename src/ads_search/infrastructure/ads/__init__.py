"""
ADS API Integration

Async client for the NASA ADS search and export endpoints.
"""

from __future__ import annotations

from ads_search.infrastructure.ads.client import (
    DEFAULT_BASE_URL,
    DEFAULT_FIELDS,
    DETAIL_FIELDS,
    INITIAL_CURSOR,
    VALIDATION_QUERY,
    ADSClient,
)

__all__ = [
    "ADSClient",
    "DEFAULT_BASE_URL",
    "DEFAULT_FIELDS",
    "DETAIL_FIELDS",
    "INITIAL_CURSOR",
    "VALIDATION_QUERY",
]
