"""
Cleanup utilities for orphaned temp downloads.

``download()`` without a destination creates a fresh ``tg-files-*``
directory under the temp dir on every call. Callers that never move the
file out leave these behind; this removes the stale ones.
"""

import asyncio
import logging
import shutil
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Tuple

from ..core.config import get_settings
from ..infrastructure.local_storage import TEMP_DIR_PREFIX

logger = logging.getLogger(__name__)

# Default max age for temp downloads (1 hour)
DEFAULT_MAX_AGE_HOURS = 1


def get_temp_root() -> Path:
    """Directory under which temp download directories are created."""
    settings = get_settings()
    return Path(settings.temp_dir or tempfile.gettempdir()).resolve()


def _dir_size(directory: Path) -> int:
    return sum(f.stat().st_size for f in directory.rglob("*") if f.is_file())


def cleanup_old_downloads(
    root: Optional[Path] = None,
    max_age_hours: float = DEFAULT_MAX_AGE_HOURS,
    dry_run: bool = False,
) -> Tuple[int, int, int]:
    """
    Remove temp download directories older than max_age_hours.

    Args:
        root: Directory holding the ``tg-files-*`` directories
              (default: configured temp dir)
        max_age_hours: Maximum age of a download directory in hours
        dry_run: If True, don't actually delete anything

    Returns:
        Tuple of (dirs_found, dirs_deleted, bytes_freed)
    """
    root = root or get_temp_root()
    if not root.exists():
        logger.debug(f"Directory does not exist: {root}")
        return (0, 0, 0)

    cutoff_time = datetime.now() - timedelta(hours=max_age_hours)
    dirs_found = 0
    dirs_deleted = 0
    bytes_freed = 0

    for directory in root.glob(f"{TEMP_DIR_PREFIX}*"):
        if not directory.is_dir():
            continue

        dirs_found += 1

        try:
            mtime = datetime.fromtimestamp(directory.stat().st_mtime)
            if mtime >= cutoff_time:
                continue

            size = _dir_size(directory)
            if dry_run:
                logger.info(f"[DRY RUN] Would delete: {directory} ({size} bytes)")
            else:
                shutil.rmtree(directory)
                logger.info(f"Deleted: {directory} ({size} bytes)")

            dirs_deleted += 1
            bytes_freed += size
        except OSError as e:
            logger.warning(f"Error processing {directory}: {e}")

    logger.info(
        f"Cleanup complete: {dirs_deleted}/{dirs_found} download dirs deleted, "
        f"{bytes_freed / 1024:.1f} KB freed"
    )
    return (dirs_found, dirs_deleted, bytes_freed)


async def run_periodic_cleanup(
    interval_hours: float = 1.0,
    max_age_hours: float = DEFAULT_MAX_AGE_HOURS,
) -> None:
    """
    Run periodic cleanup as a background task.

    Args:
        interval_hours: How often to run cleanup
        max_age_hours: Max age of download directories to keep
    """
    logger.info(
        f"Starting periodic cleanup: every {interval_hours}h, max age {max_age_hours}h"
    )

    while True:
        try:
            await asyncio.sleep(interval_hours * 3600)
            await asyncio.to_thread(cleanup_old_downloads, None, max_age_hours)
        except asyncio.CancelledError:
            logger.info("Periodic cleanup task cancelled")
            break
        except Exception as e:
            logger.error(f"Error in periodic cleanup: {e}", exc_info=True)
