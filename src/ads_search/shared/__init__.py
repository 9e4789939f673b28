"""
Shared Kernel - cross-cutting concerns used by every layer.

Provides:
- Unified exception hierarchy
"""

from __future__ import annotations

from .exceptions import (
    AdsSearchError,
    APIError,
    ConfigurationError,
    DataError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    ExhaustedError,
    InvalidQueryError,
    MissingTokenError,
    NetworkError,
    NoActiveQueryError,
    NotFoundError,
    PaginationError,
    ParseError,
    PersistenceCorruptError,
    RateLimitError,
    RemoteError,
    StaleResponseError,
    UnauthorizedError,
    ValidationError,
    is_retryable_error,
)

__all__ = [
    "AdsSearchError",
    "ErrorContext",
    "ErrorSeverity",
    "ErrorCategory",
    # API errors
    "APIError",
    "UnauthorizedError",
    "MissingTokenError",
    "RemoteError",
    "RateLimitError",
    "NetworkError",
    # Validation errors
    "ValidationError",
    "InvalidQueryError",
    # Pagination errors
    "PaginationError",
    "NoActiveQueryError",
    "ExhaustedError",
    "StaleResponseError",
    # Data errors
    "DataError",
    "NotFoundError",
    "ParseError",
    "PersistenceCorruptError",
    # Configuration errors
    "ConfigurationError",
    "is_retryable_error",
]
