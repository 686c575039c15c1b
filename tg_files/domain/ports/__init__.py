"""Domain port protocols for decoupling file retrieval from I/O backends."""

from .file_fetcher import FileFetcher
from .local_storage import LocalStorage

__all__ = ["FileFetcher", "LocalStorage"]
