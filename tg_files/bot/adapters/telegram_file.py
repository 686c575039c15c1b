"""Adapter for python-telegram-bot ``File`` objects.

PTB objects are frozen, so instead of decorating them in place this returns
a ``HydratedFile`` built from ``File.to_dict()``.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

from telegram import File

from ...core.services import build_transfer_engine
from ...core.typed_config import DeploymentConfig, FilesPluginOptions
from ...services.hydration import HydratedFile, hydrate_value
from ...services.transfer_engine import TransferEngine

logger = logging.getLogger(__name__)


def _path_is_url(root: str, token: str, path: str, env: str) -> str:
    return path


def hydrate_file(
    file: File,
    token: str,
    options: Optional[FilesPluginOptions] = None,
    *,
    engine: Optional[TransferEngine] = None,
) -> HydratedFile:
    """Wrap a PTB ``File`` so it gains ``get_url()``, ``download()`` and ``stream()``.

    ``Bot.get_file`` in PTB already expands ``file_path`` into a full download
    URL when talking to the cloud Bot API; such URLs are used unchanged.
    Absolute local paths (``local_mode=True``) are copied from disk as usual.
    """
    data = file.to_dict()
    path = data.get("file_path")
    if path and urlsplit(path).scheme in ("http", "https"):
        logger.debug(f"File {file.file_id} already carries a download URL")
        options = (options or FilesPluginOptions()).model_copy(
            update={"build_file_url": _path_is_url}
        )

    config = DeploymentConfig.from_options(token, options)
    return hydrate_value(data, config, engine or build_transfer_engine())
