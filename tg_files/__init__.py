"""File helpers for the Telegram Bot API.

Hydrates ``getFile`` results (and any other result carrying a ``file_id``)
with ``get_url()``, ``download()`` and ``stream()``, for both the cloud Bot
API and self-hosted servers running in local mode.
"""

from .api.telegram_api import TelegramApiClient
from .core.typed_config import DeploymentConfig, FilesPluginOptions, default_build_file_url
from .domain.errors import (
    CopyFailed,
    DownloadFailed,
    FileRetrievalError,
    TelegramApiError,
    UnresolvableLocation,
)
from .domain.files import FileMetadata, LocalLocation, RemoteLocation
from .services.hydration import HydratedFile, hydrate_files, hydrate_value
from .version import __version__

__all__ = [
    "CopyFailed",
    "DeploymentConfig",
    "DownloadFailed",
    "FileMetadata",
    "FileRetrievalError",
    "FilesPluginOptions",
    "HydratedFile",
    "LocalLocation",
    "RemoteLocation",
    "TelegramApiClient",
    "TelegramApiError",
    "UnresolvableLocation",
    "__version__",
    "default_build_file_url",
    "hydrate_files",
    "hydrate_value",
]
