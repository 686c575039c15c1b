"""
Service wiring - picks the I/O backends the transfer engine runs on.

Usage:
    from tg_files.core.services import build_transfer_engine

    engine = build_transfer_engine()
"""

import logging
from typing import Optional

import httpx

from ..infrastructure.httpx_fetcher import HttpxFileFetcher
from ..infrastructure.local_storage import OsLocalStorage
from ..services.transfer_engine import TransferEngine
from .config import Settings, get_settings

logger = logging.getLogger(__name__)


def build_transfer_engine(
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> TransferEngine:
    """Create a TransferEngine on the filesystem and httpx backends.

    Args:
        settings: Settings to read timeouts, chunk size and temp dir from
                  (default: the cached application settings)
        client: Shared httpx client; None opens one client per transfer
    """
    settings = settings or get_settings()
    storage = OsLocalStorage(
        temp_dir=settings.temp_dir, chunk_size=settings.download_chunk_size
    )
    fetcher = HttpxFileFetcher(
        client=client,
        timeout=settings.download_timeout,
        chunk_size=settings.download_chunk_size,
    )
    logger.debug(
        f"Transfer engine ready (temp_dir={settings.temp_dir or 'system'}, "
        f"chunk_size={settings.download_chunk_size})"
    )
    return TransferEngine(storage, fetcher)
