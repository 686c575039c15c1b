"""
Typed domain errors for file retrieval.

Callers can distinguish a file that has no server path yet from a failed
local copy or a failed network download, and decide on retries themselves.
"""

from typing import Optional

from .files import redact_url


class DomainError(Exception):
    """Base class for all domain-specific errors."""


# ---------------------------------------------------------------------------
# File retrieval
# ---------------------------------------------------------------------------


class FileRetrievalError(DomainError):
    """Base class for errors raised while locating or transferring a file."""


class UnresolvableLocation(FileRetrievalError):
    """The file metadata carries no ``file_path``, so there is nothing to fetch."""

    def __init__(self, file_id: str) -> None:
        self.file_id = file_id
        super().__init__(f"File path is not available for file '{file_id}'")


class CopyFailed(FileRetrievalError):
    """Copying or reading a file on the local filesystem failed."""

    def __init__(
        self, source: str, destination: Optional[str] = None, reason: str = ""
    ) -> None:
        self.source = source
        self.destination = destination
        self.reason = reason
        target = f" to {destination}" if destination else ""
        detail = f": {reason}" if reason else ""
        super().__init__(f"Could not copy {source}{target}{detail}")


class DownloadFailed(FileRetrievalError):
    """The HTTP download returned no usable body or broke off midway."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Download failed for {redact_url(url)}{detail}")


# ---------------------------------------------------------------------------
# Bot API envelope
# ---------------------------------------------------------------------------


class TelegramApiError(DomainError):
    """The Bot API answered with ``ok: false``."""

    def __init__(
        self, method: str, error_code: int = 0, description: str = ""
    ) -> None:
        self.method = method
        self.error_code = error_code
        self.description = description
        super().__init__(
            f"Telegram API {method} failed ({error_code}): {description}"
        )
