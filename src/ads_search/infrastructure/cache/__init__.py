"""
Cache Infrastructure

Provides caching layers for expensive API calls.
"""

from __future__ import annotations

from ads_search.infrastructure.cache.detail_cache import (
    CacheStats,
    DetailCache,
)

__all__ = [
    "CacheStats",
    "DetailCache",
]
