"""Filesystem implementation of the LocalStorage port.

Reads and writes are pushed to worker threads chunk by chunk so a large copy
never stalls the event loop. Files are opened on the loop itself, so a handle
exists only once the code that cleans it up is already in charge of it.
"""

import asyncio
import logging
import os
import tempfile
from contextlib import suppress
from typing import AsyncIterator, Optional

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "tg-files-"
TEMP_FILE_NAME = "filedata"
DEFAULT_CHUNK_SIZE = 64 * 1024


class OsLocalStorage:
    """LocalStorage backed by ``os`` and ``tempfile``."""

    def __init__(
        self, temp_dir: Optional[str] = None, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> None:
        self.temp_dir = temp_dir
        self.chunk_size = chunk_size

    def is_absolute(self, path: str) -> bool:
        return os.path.isabs(path)

    async def create_temp_path(self) -> str:
        """Create a fresh private directory and return a path inside it.

        The returned file does not exist yet; only its directory does.
        """
        base = os.path.realpath(self.temp_dir or tempfile.gettempdir())
        directory = await asyncio.to_thread(
            tempfile.mkdtemp, prefix=TEMP_DIR_PREFIX, dir=base
        )
        path = os.path.join(directory, TEMP_FILE_NAME)
        logger.debug(f"Allocated temp path {path}")
        return path

    async def copy_file(self, source: str, destination: str) -> None:
        with open(source, "rb") as src:
            # "x" mode: fail instead of clobbering an existing file
            dst = open(destination, "xb")
            try:
                with dst:
                    while True:
                        chunk = await asyncio.to_thread(src.read, self.chunk_size)
                        if not chunk:
                            break
                        await asyncio.to_thread(dst.write, chunk)
            except BaseException:
                dst.close()
                os.unlink(destination)
                raise

    async def open_chunks(self, path: str) -> AsyncIterator[bytes]:
        """Yield the file's contents chunk by chunk until end of file."""
        with open(path, "rb") as handle:
            while True:
                chunk = await asyncio.to_thread(handle.read, self.chunk_size)
                if not chunk:
                    break
                yield chunk

    async def remove(self, path: str) -> None:
        """Delete ``path`` if it exists.

        A path handed out by ``create_temp_path`` takes its private directory
        with it.
        """
        with suppress(FileNotFoundError):
            os.unlink(path)
        directory, name = os.path.split(path)
        if name == TEMP_FILE_NAME and os.path.basename(directory).startswith(
            TEMP_DIR_PREFIX
        ):
            with suppress(FileNotFoundError):
                os.rmdir(directory)
        logger.debug(f"Removed {path}")
