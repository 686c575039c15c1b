"""The get-url / download / stream operations bound to one file."""

import logging
from typing import AsyncIterator, Optional

from ..core.typed_config import DeploymentConfig
from ..domain.files import FileMetadata, LocalLocation, Location
from .location_resolver import resolve_location
from .transfer_engine import TransferEngine

logger = logging.getLogger(__name__)


class FileCapabilities:
    """Retrieval operations for one file under one deployment config.

    Every call re-resolves the location and re-transfers the bytes; nothing
    is memoised between calls.
    """

    def __init__(
        self,
        metadata: FileMetadata,
        config: DeploymentConfig,
        engine: TransferEngine,
    ) -> None:
        self.metadata = metadata
        self.config = config
        self.engine = engine

    def _resolve(self) -> Location:
        return resolve_location(self.metadata, self.config, self.engine.storage)

    def get_url(self) -> str:
        """URL of the file contents, or its local path on a self-hosted server.

        Raises:
            UnresolvableLocation: the file has no ``file_path``.
        """
        return self.engine.to_string(self._resolve())

    async def download(self, path: Optional[str] = None) -> str:
        """Save the file to ``path`` (default: a new temp file) and return that path.

        With a self-hosted Bot API server the local file is copied; otherwise
        it is downloaded. Either way the caller ends up with a readable local
        file.
        """
        location = self._resolve()
        logger.debug(
            f"Fetching file {self.metadata.file_id} "
            f"({'copy' if isinstance(location, LocalLocation) else 'download'})"
        )
        return await self.engine.download_to(location, path)

    def stream(self) -> AsyncIterator[bytes]:
        """Iterate over the file contents chunk by chunk.

        The location is resolved right away, so a missing ``file_path`` fails
        here rather than on the first chunk.
        """
        return self.engine.stream_bytes(self._resolve())
