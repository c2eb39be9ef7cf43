"""
Session Cache - Core Error Types

Defines the exception hierarchy for the session cache adapter.
All exceptions inherit from SessionCacheError for consistent error handling.

Not-found conditions are never raised: lookups, removals and conditional
writes report misses through return values instead.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Standard error codes for structured error responses.

    Used by callers that expose the cache through an API surface.
    """

    # Input validation errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_KEY = "INVALID_KEY"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CONTAINER_MISSING = "CONTAINER_MISSING"

    # Cache errors
    CACHE_FAILURE = "CACHE_FAILURE"

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SessionCacheError(Exception):
    """Base exception for all session cache errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(SessionCacheError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=500)


class InvalidArgumentError(SessionCacheError):
    """Raised when an operation receives an argument it cannot accept."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=400)


class CacheError(SessionCacheError):
    """Base exception for cache-related errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=500)


class CacheOperationError(CacheError):
    """Raised when a cache operation cannot be applied to the stored data."""

    pass


def make_error_response(
    error_code: ErrorCode,
    message: str,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Create a standardized error response.

    Args:
        error_code: Standard error code
        message: Human-readable error message
        context: Additional context/details

    Returns:
        Standardized error response dictionary

    Example:
        >>> make_error_response(
        ...     ErrorCode.INVALID_ARGUMENT,
        ...     "No prefix given",
        ...     {"prefix": ""}
        ... )
        {
            "success": False,
            "error_code": "INVALID_ARGUMENT",
            "message": "No prefix given",
            "details": {"prefix": ""}
        }
    """
    return {
        "success": False,
        "error_code": error_code.value,
        "message": message,
        "details": context or {},
    }


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract appropriate ErrorCode from an exception.

    Args:
        error: Exception to categorize

    Returns:
        Appropriate ErrorCode for the exception
    """
    if isinstance(error, InvalidArgumentError):
        if "key" in error.details:
            return ErrorCode.INVALID_KEY
        return ErrorCode.INVALID_ARGUMENT

    if isinstance(error, ConfigurationError):
        if error.details.get("reason") == "container_missing":
            return ErrorCode.CONTAINER_MISSING
        return ErrorCode.CONFIGURATION_ERROR

    if isinstance(error, CacheError):
        return ErrorCode.CACHE_FAILURE

    return ErrorCode.INTERNAL_ERROR
