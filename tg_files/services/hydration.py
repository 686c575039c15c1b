"""
File hydration transformer for Bot API calls.

Installed in front of the raw dispatcher, it lets every call go through
untouched and then scans successful results for values shaped like a Bot API
``File`` (anything with a ``file_id``). Each one is replaced by a
``HydratedFile``: the same dict, plus ``get_url()``, ``download()`` and
``stream()``.

    client.use(hydrate_files(token))
    file = await client.get_file(file_id)
    path = await file.download()
"""

import logging
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional

from pydantic import ValidationError

from ..core.services import build_transfer_engine
from ..core.typed_config import DeploymentConfig, FilesPluginOptions
from ..domain.files import FileMetadata, is_file_like
from .file_capabilities import FileCapabilities
from .transfer_engine import TransferEngine

logger = logging.getLogger(__name__)

ApiResponse = Dict[str, Any]
Payload = Optional[Dict[str, Any]]
# (method, payload) -> JSON envelope {"ok": ..., "result": ...}
Dispatch = Callable[[str, Payload], Awaitable[ApiResponse]]
# (previous dispatch, method, payload) -> JSON envelope
Transformer = Callable[[Dispatch, str, Payload], Awaitable[ApiResponse]]


class HydratedFile(dict):
    """A Bot API ``File`` dict that can also fetch its own contents.

    All wire fields stay readable as dict items and the value still compares
    equal to the plain dict it was built from.
    """

    def __init__(self, data: Any, capabilities: FileCapabilities) -> None:
        super().__init__(data)
        self._capabilities = capabilities

    @property
    def capabilities(self) -> FileCapabilities:
        return self._capabilities

    @property
    def metadata(self) -> FileMetadata:
        return self._capabilities.metadata

    def get_url(self) -> str:
        """URL of the file contents, or the local path on a self-hosted server."""
        return self._capabilities.get_url()

    async def download(self, path: Optional[str] = None) -> str:
        """Save the file to ``path`` (default: a new temp file), return the path."""
        return await self._capabilities.download(path)

    def stream(self) -> AsyncIterator[bytes]:
        """Iterate over the file contents chunk by chunk."""
        return self._capabilities.stream()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"


def hydrate_value(value: Any, config: DeploymentConfig, engine: TransferEngine) -> Any:
    """Attach file capabilities to every file-shaped value inside ``value``.

    Lists and dicts are rebuilt, never changed in place, so ``value`` and
    anything else holding on to it stay exactly as they were. A file-shaped
    dict comes back as a ``HydratedFile``; one that fails validation comes
    back as a plain dict.
    """
    if isinstance(value, list):
        return [hydrate_value(item, config, engine) for item in value]

    if not isinstance(value, dict):
        return value

    data = {key: hydrate_value(item, config, engine) for key, item in value.items()}
    if not is_file_like(data):
        return data

    try:
        metadata = FileMetadata.from_value(data)
    except ValidationError as e:
        logger.warning(
            f"Skipping malformed file object {data.get('file_id')!r}: "
            f"{e.error_count()} validation error(s)"
        )
        return data

    # Already hydrated values are rebound to this config
    return HydratedFile(data, FileCapabilities(metadata, config, engine))


def hydrate_files(
    token: str,
    options: Optional[FilesPluginOptions] = None,
    *,
    engine: Optional[TransferEngine] = None,
) -> Transformer:
    """Build the transformer that hydrates file results.

    Args:
        token: Bot token, used to build file URLs
        options: API root, environment and URL builder overrides
        engine: Transfer backends (default: filesystem + httpx from settings)

    Returns:
        Transformer to register with ``TelegramApiClient.use()``
    """
    config = DeploymentConfig.from_options(token, options)
    if engine is None:
        engine = build_transfer_engine()

    async def transformer(
        prev: Dispatch, method: str, payload: Payload = None
    ) -> ApiResponse:
        response = await prev(method, payload)
        if not response.get("ok") or "result" not in response:
            return response
        try:
            result = hydrate_value(response["result"], config, engine)
        except Exception as e:
            # The call itself succeeded; hand back the undecorated response
            logger.error(f"File hydration failed for {method}: {e}", exc_info=True)
            return response
        return {**response, "result": result}

    return transformer
