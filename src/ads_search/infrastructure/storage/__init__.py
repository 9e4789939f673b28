"""
Storage Infrastructure

Key/value persistence for the API token and the bibliography.
"""

from __future__ import annotations

from ads_search.infrastructure.storage.key_value import (
    BIBLIOGRAPHY_KEY,
    TOKEN_KEY,
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
    TokenStore,
)

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "TokenStore",
    "TOKEN_KEY",
    "BIBLIOGRAPHY_KEY",
]
