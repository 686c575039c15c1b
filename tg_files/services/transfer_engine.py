"""
Transfer engine: turns a resolved Location into bytes.

A LocalLocation (self-hosted Bot API server sharing its disk) is copied or
read straight from the filesystem; a RemoteLocation is fetched over HTTP.
Callers get the same contract either way. Nothing here retries.
"""

import logging
from contextlib import aclosing
from typing import AsyncIterator, Optional

from ..domain.errors import CopyFailed
from ..domain.files import LocalLocation, Location, RemoteLocation
from ..domain.ports import FileFetcher, LocalStorage
from ..utils.logging import TransferLogContext

logger = logging.getLogger(__name__)


class TransferEngine:
    """Download, copy and stream files behind one interface."""

    def __init__(self, storage: LocalStorage, fetcher: FileFetcher) -> None:
        self.storage = storage
        self.fetcher = fetcher

    @staticmethod
    def to_string(location: Location) -> str:
        if isinstance(location, LocalLocation):
            return location.path
        return location.url

    async def download_to(
        self, location: Location, destination: Optional[str] = None
    ) -> str:
        """Store the file at ``destination`` (or a fresh temp path) and return the path.

        Raises:
            CopyFailed: the local source could not be copied.
            DownloadFailed: the HTTP transfer failed; no partial file is left.
        """
        allocated = destination is None
        if allocated:
            destination = await self.storage.create_temp_path()

        try:
            await self._transfer(location, destination)
        except BaseException:
            if allocated:
                await self.storage.remove(destination)
            raise

        return destination

    async def _transfer(self, location: Location, destination: str) -> None:
        if isinstance(location, LocalLocation):
            with TransferLogContext("copy", location.path, destination=destination):
                try:
                    await self.storage.copy_file(location.path, destination)
                except OSError as e:
                    raise CopyFailed(location.path, destination, str(e)) from e
        else:
            with TransferLogContext("download", location.url, destination=destination):
                await self.fetcher.download(location.url, destination)

    def stream_bytes(self, location: Location) -> AsyncIterator[bytes]:
        """Lazily produce the file's bytes.

        Nothing is opened until the first chunk is requested. Closing the
        iterator early (``aclose()``, ``contextlib.aclosing``) releases the
        underlying file handle or HTTP connection.
        """
        if isinstance(location, LocalLocation):
            return self._stream_local(location)
        return self._stream_remote(location)

    async def _stream_local(self, location: LocalLocation) -> AsyncIterator[bytes]:
        try:
            async with aclosing(self.storage.open_chunks(location.path)) as chunks:
                async for chunk in chunks:
                    yield chunk
        except OSError as e:
            raise CopyFailed(location.path, reason=str(e)) from e

    async def _stream_remote(self, location: RemoteLocation) -> AsyncIterator[bytes]:
        async with aclosing(self.fetcher.stream(location.url)) as chunks:
            async for chunk in chunks:
                yield chunk
