import logging
import os
from typing import Callable

import httpx
import pytest

# Set test environment variables
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["TELEGRAM_BOT_TOKEN"] = "test:token"

from tg_files.core.config import get_settings  # noqa: E402
from tg_files.core.typed_config import DeploymentConfig  # noqa: E402
from tg_files.infrastructure.httpx_fetcher import HttpxFileFetcher  # noqa: E402
from tg_files.infrastructure.local_storage import OsLocalStorage  # noqa: E402
from tg_files.services.transfer_engine import TransferEngine  # noqa: E402

FILE_BYTES = b"\x89PNG fake image bytes " * 500


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop the cached Settings so env changes made by a test are picked up."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def file_bytes() -> bytes:
    return FILE_BYTES


@pytest.fixture
def config():
    """Cloud Bot API config with the token from the end-to-end examples."""
    return DeploymentConfig(token="T")


@pytest.fixture
def file_server() -> Callable[[httpx.Request], httpx.Response]:
    """Mock Bot API file endpoint serving FILE_BYTES for any /file/ URL."""

    def handler(request: httpx.Request) -> httpx.Response:
        if "/file/bot" in request.url.path:
            return httpx.Response(200, content=FILE_BYTES)
        return httpx.Response(404, content=b"Not Found")

    return handler


@pytest.fixture
def make_engine(tmp_path):
    """Build a TransferEngine on the real filesystem and a mocked HTTP transport."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> TransferEngine:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        storage = OsLocalStorage(temp_dir=str(tmp_path / "tmp"), chunk_size=1024)
        (tmp_path / "tmp").mkdir(exist_ok=True)
        return TransferEngine(storage, HttpxFileFetcher(client=client, chunk_size=1024))

    return _make


@pytest.fixture
def engine(make_engine, file_server):
    return make_engine(file_server)


@pytest.fixture
def local_file(tmp_path):
    """A file as a self-hosted Bot API server would leave it on disk."""
    path = tmp_path / "server" / "documents" / "file_7.pdf"
    path.parent.mkdir(parents=True)
    path.write_bytes(FILE_BYTES)
    return path
