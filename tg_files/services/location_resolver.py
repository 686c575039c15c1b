"""Resolve file metadata to a local path or a download URL."""

import logging

from ..core.typed_config import DeploymentConfig
from ..domain.errors import UnresolvableLocation
from ..domain.files import FileMetadata, LocalLocation, Location, RemoteLocation
from ..domain.ports import LocalStorage

logger = logging.getLogger(__name__)


def resolve_location(
    metadata: FileMetadata, config: DeploymentConfig, storage: LocalStorage
) -> Location:
    """Work out where the bytes of ``metadata`` can be read from.

    A self-hosted Bot API server in local mode reports absolute paths on its
    own filesystem; those are used as-is. Anything else is relative to the
    file endpoint and goes through ``config.build_file_url``.

    Recomputed on every call, the config's URL builder is never cached.

    Raises:
        UnresolvableLocation: ``metadata.file_path`` is missing.
    """
    path = metadata.file_path
    if path is None:
        raise UnresolvableLocation(metadata.file_id)
    if storage.is_absolute(path):
        return LocalLocation(path)
    return RemoteLocation(config.file_url(path))
