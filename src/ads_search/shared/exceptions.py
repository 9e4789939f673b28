"""
Unified Exception Hierarchy for ADS Search MCP.

Exception Hierarchy:
    AdsSearchError (base)
    ├── APIError
    │   ├── UnauthorizedError
    │   │   └── MissingTokenError
    │   ├── RemoteError
    │   │   └── RateLimitError
    │   └── NetworkError
    ├── ValidationError
    │   └── InvalidQueryError
    ├── PaginationError
    │   ├── NoActiveQueryError
    │   ├── ExhaustedError
    │   └── StaleResponseError
    ├── DataError
    │   ├── NotFoundError
    │   ├── ParseError
    │   └── PersistenceCorruptError
    └── ConfigurationError
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    WARNING = auto()  # Recoverable, can continue
    ERROR = auto()  # Failed but can retry
    CRITICAL = auto()  # Cannot continue
    TRANSIENT = auto()  # Temporary, should retry automatically


class ErrorCategory(Enum):
    """Categories for error classification."""

    API = "api"
    AUTH = "auth"
    VALIDATION = "validation"
    PAGINATION = "pagination"
    DATA = "data"
    CONFIGURATION = "config"
    NETWORK = "network"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Rich context for error messages."""

    tool_name: str | None = None
    operation: str | None = None
    input_value: Any = None
    suggestion: str | None = None
    example: str | None = None
    retry_after: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def with_defaults(self, **overrides: Any) -> ErrorContext:
        """Return a copy where unset fields take the given defaults."""
        values = {
            "tool_name": self.tool_name,
            "operation": self.operation,
            "input_value": self.input_value,
            "suggestion": self.suggestion,
            "example": self.example,
            "retry_after": self.retry_after,
            "metadata": self.metadata,
        }
        for key, value in overrides.items():
            if values.get(key) is None:
                values[key] = value
        return ErrorContext(**values)


class AdsSearchError(Exception):
    """
    Base exception for all ADS Search errors.

    Provides:
    - Structured error context
    - Severity classification
    - Retry guidance
    - Agent-friendly formatting
    """

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.API,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "error_type": type(self).__name__,
            "category": self.category.value,
            "severity": self.severity.name.lower(),
            "retryable": self.retryable,
        }
        if self.context.tool_name:
            result["tool"] = self.context.tool_name
        if self.context.suggestion:
            result["suggestion"] = self.context.suggestion
        if self.context.example:
            result["example"] = self.context.example
        if self.context.retry_after:
            result["retry_after_seconds"] = self.context.retry_after
        return result

    def to_agent_message(self) -> str:
        """Format for Agent consumption (Markdown)."""
        parts = [f"**Error**: {self}"]

        if self.context.suggestion:
            parts.append(f"**Suggestion**: {self.context.suggestion}")
        if self.context.example:
            parts.append(f"**Example**: `{self.context.example}`")
        if self.retryable:
            if self.context.retry_after:
                parts.append(f"Retry after {self.context.retry_after:.1f} seconds")
            else:
                parts.append("This error is retryable")

        return "\n".join(parts)


# =============================================================================
# API Errors
# =============================================================================


class APIError(AdsSearchError):
    """Base class for errors reported by the remote API or its transport."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        retryable: bool = True,
        category: ErrorCategory = ErrorCategory.API,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=category,
            retryable=retryable,
        )


class UnauthorizedError(APIError):
    """Raised when the API token is missing, invalid or expired (HTTP 401)."""

    def __init__(
        self,
        message: str = "Invalid API token",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).with_defaults(
            suggestion="Re-enter your ADS API token with set_api_token",
        )
        super().__init__(message, context=ctx, retryable=False, category=ErrorCategory.AUTH)


class MissingTokenError(UnauthorizedError):
    """Raised when an authenticated call is made before a token is configured."""

    def __init__(
        self,
        message: str = "API token required",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).with_defaults(
            suggestion="Configure your ADS API token first",
            example='set_api_token(token="...")',
        )
        super().__init__(message, context=ctx)


class RemoteError(APIError):
    """Raised for any non-2xx response other than 401."""

    def __init__(
        self,
        status: int,
        message: str | None = None,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message or f"ADS API error: {status}",
            context=context,
            retryable=status >= 500,
        )
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status"] = self.status
        return result


class RateLimitError(RemoteError):
    """Raised when API rate limit is exceeded (HTTP 429)."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        *,
        retry_after: float = 1.0,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).with_defaults(
            suggestion="Wait and retry the request",
            retry_after=retry_after,
        )
        super().__init__(429, message, context=ctx)
        self.retryable = True
        self.severity = ErrorSeverity.TRANSIENT


class NetworkError(APIError):
    """Raised for network connectivity issues."""

    def __init__(
        self,
        message: str = "Network connection failed",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context, retryable=True, category=ErrorCategory.NETWORK)


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(AdsSearchError):
    """Base class for validation errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.VALIDATION,
            retryable=False,
        )


class InvalidQueryError(ValidationError):
    """Raised when search query is invalid."""

    def __init__(
        self,
        query: str | None,
        reason: str = "Query cannot be empty",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).with_defaults(
            input_value=query,
            suggestion="Provide a valid search query",
            example='search_papers(query="author:\\"Huchra, John\\" year:1990-2000")',
        )
        super().__init__(f"Invalid query: {reason}", context=ctx)


# =============================================================================
# Pagination Errors
# =============================================================================


class PaginationError(AdsSearchError):
    """Base class for misuse of a pagination session."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.PAGINATION,
            retryable=False,
        )


class NoActiveQueryError(PaginationError):
    """Raised by load_more when no search has been run in the session."""

    def __init__(self, message: str = "No active query", *, context: ErrorContext | None = None) -> None:
        ctx = (context or ErrorContext()).with_defaults(suggestion="Run search_papers first")
        super().__init__(message, context=ctx)


class ExhaustedError(PaginationError):
    """Raised by load_more when the session holds no continuation token."""

    def __init__(
        self,
        message: str = "No more results for the current query",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context)


class StaleResponseError(PaginationError):
    """Raised when a response arrives for a request the session has moved past."""

    def __init__(
        self,
        message: str = "Response superseded by a newer request",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context)


# =============================================================================
# Data Errors
# =============================================================================


class DataError(AdsSearchError):
    """Base class for data-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.DATA,
            retryable=False,
        )


class NotFoundError(DataError):
    """Raised when requested data is not found."""

    def __init__(
        self,
        resource: str,
        identifier: str | None = None,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        msg = f"{resource} not found"
        if identifier:
            msg = f"{resource} not found: {identifier}"

        ctx = (context or ErrorContext()).with_defaults(
            input_value=identifier,
            suggestion="Check the identifier and try again",
        )
        super().__init__(msg, context=ctx)
        self.identifier = identifier


class ParseError(DataError):
    """Raised when data parsing fails."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        full_msg = f"Parse error: {message}"
        if source:
            full_msg = f"Parse error ({source}): {message}"
        super().__init__(full_msg, context=context)


class PersistenceCorruptError(DataError):
    """Raised when a persisted value cannot be decoded."""

    def __init__(
        self,
        key: str,
        reason: str = "stored value could not be parsed",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(f"Corrupt data under '{key}': {reason}", context=context)
        self.key = key
        self.severity = ErrorSeverity.WARNING


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(AdsSearchError):
    """Raised for configuration-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            retryable=False,
        )


def is_retryable_error(error: Exception) -> bool:
    """Check if an error should be retried by re-invoking the same operation."""
    if isinstance(error, AdsSearchError):
        return error.retryable

    error_str = str(error).lower()
    transient_patterns = [
        "rate limit",
        "too many requests",
        "temporarily unavailable",
        "service unavailable",
        "connection reset",
        "timeout",
    ]
    return any(pattern in error_str for pattern in transient_patterns)
