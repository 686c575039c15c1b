"""FileFetcher port -- abstracts fetching file bytes from a URL."""

from typing import AsyncIterator, Protocol, runtime_checkable


@runtime_checkable
class FileFetcher(Protocol):
    """Streams a remote file, or writes it to a destination path.

    ``download`` must not leave a partial file behind when it fails.
    """

    def stream(self, url: str) -> AsyncIterator[bytes]: ...

    async def download(self, url: str, destination: str) -> None: ...
