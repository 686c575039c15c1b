"""Standardized error reporting for file retrieval.

Provides:
- ErrorCategory enum for classifying exceptions
- classify_error() to map exceptions to categories
- ErrorCounter for tracking error counts by category
- format_user_error_message() for user-friendly messages
- report_errors() decorator that classifies, counts and re-raises
"""

import functools
import logging
from enum import Enum
from typing import Dict, Optional

import httpx

from ..domain.errors import (
    CopyFailed,
    DownloadFailed,
    TelegramApiError,
    UnresolvableLocation,
)

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Categories for classifying retrieval errors."""

    UNRESOLVABLE = "unresolvable"
    LOCAL_IO = "local_io"
    NETWORK = "network"
    API = "api"
    VALIDATION = "validation"
    INTERNAL = "internal"


def classify_error(exc: Exception) -> ErrorCategory:
    """Classify an exception into an error category."""
    if isinstance(exc, UnresolvableLocation):
        return ErrorCategory.UNRESOLVABLE
    if isinstance(exc, CopyFailed):
        return ErrorCategory.LOCAL_IO
    if isinstance(exc, (DownloadFailed, httpx.TransportError, ConnectionError, TimeoutError)):
        return ErrorCategory.NETWORK
    if isinstance(exc, TelegramApiError):
        return ErrorCategory.API
    # OSError after the network check: ConnectionError/TimeoutError subclass it
    if isinstance(exc, OSError):
        return ErrorCategory.LOCAL_IO
    if isinstance(exc, (ValueError, TypeError, KeyError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.INTERNAL


class ErrorCounter:
    """In-memory counter for errors by category."""

    def __init__(self) -> None:
        self._counts: Dict[ErrorCategory, int] = {cat: 0 for cat in ErrorCategory}

    def increment(self, category: ErrorCategory) -> None:
        """Increment the count for a category."""
        self._counts[category] = self._counts.get(category, 0) + 1

    def get_counts(self) -> Dict[ErrorCategory, int]:
        """Return a copy of all counts."""
        return dict(self._counts)

    def get_total(self) -> int:
        """Return total errors across all categories."""
        return sum(self._counts.values())

    def reset(self) -> None:
        """Reset all counts to zero."""
        for cat in ErrorCategory:
            self._counts[cat] = 0


# Global singleton
_error_counter: Optional[ErrorCounter] = None


def get_error_counter() -> ErrorCounter:
    """Get the global error counter singleton."""
    global _error_counter
    if _error_counter is None:
        _error_counter = ErrorCounter()
    return _error_counter


_USER_MESSAGES = {
    ErrorCategory.UNRESOLVABLE: (
        "Telegram has not provided a path for this file yet. Call getFile again."
    ),
    ErrorCategory.LOCAL_IO: (
        "The file could not be copied on the local filesystem."
    ),
    ErrorCategory.NETWORK: (
        "The file could not be downloaded. Please try again in a moment."
    ),
    ErrorCategory.API: "The Bot API rejected the request.",
    ErrorCategory.VALIDATION: (
        "The input appears to be invalid. Please check and try again."
    ),
    ErrorCategory.INTERNAL: ("An unexpected error occurred. Please try again later."),
}


def format_user_error_message(category: ErrorCategory) -> str:
    """Format a user-friendly error message for a category."""
    return _USER_MESSAGES.get(category, _USER_MESSAGES[ErrorCategory.INTERNAL])


def report_errors(operation: str):
    """Decorator that classifies, counts and logs errors of an async call.

    The exception is re-raised unchanged; retrying stays the caller's call.

    Usage:
        @report_errors("download")
        async def fetch(file_id):
            ...
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as exc:
                category = classify_error(exc)
                get_error_counter().increment(category)
                logger.error(
                    "Operation '%s' error [%s]: %s",
                    operation,
                    category.value,
                    exc,
                    exc_info=True,
                )
                raise

        return wrapper

    return decorator
