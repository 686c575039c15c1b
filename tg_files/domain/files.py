"""File metadata and retrieval locations.

``FileMetadata`` mirrors the Bot API ``File`` object. A ``Location`` is what
the metadata resolves to at call time: a path on the local filesystem when a
self-hosted Bot API server shares its storage with us, or a URL otherwise.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

_BOT_TOKEN_RE = re.compile(r"/bot[^/]+/")


def redact_url(url: str) -> str:
    """Mask the bot token embedded in a Bot API file URL."""
    return _BOT_TOKEN_RE.sub("/bot<token>/", url, count=1)


def is_file_like(value: Any) -> bool:
    """Structural check: anything shaped like a Bot API ``File`` on the wire."""
    return isinstance(value, Mapping) and "file_id" in value


class FileMetadata(BaseModel):
    """Read-only descriptor of a file stored by the Bot API server."""

    model_config = ConfigDict(frozen=True, extra="ignore", from_attributes=True)

    file_id: str
    file_unique_id: Optional[str] = None
    file_size: Optional[int] = None
    file_path: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> "FileMetadata":
        """Build metadata from a JSON mapping or an object with matching attributes."""
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        return cls.model_validate(value, from_attributes=True)


@dataclass(frozen=True)
class LocalLocation:
    """File bytes are reachable directly on the local filesystem."""

    path: str


@dataclass(frozen=True)
class RemoteLocation:
    """File bytes have to be fetched over HTTP."""

    url: str


Location = Union[LocalLocation, RemoteLocation]
