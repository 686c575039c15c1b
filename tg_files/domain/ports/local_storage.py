"""LocalStorage port -- abstracts the filesystem primitives used for file retrieval."""

from typing import AsyncIterator, Protocol, runtime_checkable


@runtime_checkable
class LocalStorage(Protocol):
    """Temp paths, copies and chunked reads on the local filesystem.

    One implementation per platform, chosen when the transfer engine is built.
    ``create_temp_path`` returns a path that does not exist yet, and
    ``copy_file`` refuses to overwrite an existing destination. ``remove``
    deletes a file if present, together with the private directory of a
    temp path.
    """

    def is_absolute(self, path: str) -> bool: ...

    async def create_temp_path(self) -> str: ...

    async def copy_file(self, source: str, destination: str) -> None: ...

    def open_chunks(self, path: str) -> AsyncIterator[bytes]: ...

    async def remove(self, path: str) -> None: ...
