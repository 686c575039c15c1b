"""httpx implementation of the FileFetcher port."""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from ..domain.errors import DownloadFailed
from ..domain.files import redact_url

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
DEFAULT_CHUNK_SIZE = 64 * 1024


def _ensure_body(response: httpx.Response, url: str) -> None:
    if not response.is_success:
        raise DownloadFailed(url, f"HTTP {response.status_code}, no file body")


class HttpxFileFetcher:
    """Streams Bot API file URLs with ``httpx.AsyncClient``.

    Pass a shared ``client`` to reuse its connection pool; otherwise every
    transfer opens and closes its own client.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.client = client
        self.timeout = timeout
        self.chunk_size = chunk_size

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    async def stream(self, url: str) -> AsyncIterator[bytes]:
        """Yield the response body chunk by chunk as it arrives."""
        try:
            async with self._session() as client:
                async with client.stream("GET", url) as response:
                    _ensure_body(response, url)
                    async for chunk in response.aiter_bytes(self.chunk_size):
                        yield chunk
        except httpx.HTTPError as e:
            raise DownloadFailed(url, f"{type(e).__name__}: {e}") from e

    async def download(self, url: str, destination: str) -> None:
        """Write the response body to ``destination``, which must not exist yet.

        A partially written destination is removed before the error propagates,
        including when the surrounding task is cancelled.
        """
        try:
            async with self._session() as client:
                async with client.stream("GET", url) as response:
                    _ensure_body(response, url)
                    handle = open(destination, "xb")
                    try:
                        with handle:
                            async for chunk in response.aiter_bytes(self.chunk_size):
                                await asyncio.to_thread(handle.write, chunk)
                    except BaseException:
                        handle.close()
                        os.unlink(destination)
                        logger.warning(
                            f"Removed partial download {destination} "
                            f"from {redact_url(url)}"
                        )
                        raise
        except httpx.HTTPError as e:
            raise DownloadFailed(url, f"{type(e).__name__}: {e}") from e
        except OSError as e:
            raise DownloadFailed(url, f"cannot write {destination}: {e}") from e
