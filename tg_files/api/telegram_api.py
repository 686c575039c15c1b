"""
Telegram Bot API caller with a transformer chain.

Every method call goes through the installed transformers, last installed
outermost, before reaching the raw HTTP dispatch:

    client = TelegramApiClient(token)
    client.use(hydrate_files(token))
    file = await client.get_file(file_id)

Functions:
- TelegramApiClient.call(method, payload)  -- full JSON envelope
- TelegramApiClient.get_file(file_id)      -- ``result`` of getFile
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.typed_config import DEFAULT_API_ROOT, Environment
from ..domain.errors import TelegramApiError
from ..services.hydration import ApiResponse, Dispatch, Payload, Transformer
from ..utils.retry import RetryableError, async_retry

logger = logging.getLogger(__name__)


class TelegramApiClient:
    """Async Bot API client built on ``httpx.AsyncClient``."""

    def __init__(
        self,
        token: str,
        api_root: str = DEFAULT_API_ROOT,
        environment: Environment = "prod",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        max_attempts: int = 3,
        retry_base_delay: float = 1.0,
    ) -> None:
        self.token = token
        self.api_root = api_root.rstrip("/")
        self.environment = environment
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None
        self._transformers: List[Transformer] = []
        self._post = async_retry(
            max_attempts=max_attempts,
            base_delay=retry_base_delay,
            exceptions=(RetryableError, httpx.TransportError),
        )(self._post_once)

    async def __aenter__(self) -> "TelegramApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def use(self, *transformers: Transformer) -> "TelegramApiClient":
        """Install transformers around every subsequent call."""
        self._transformers.extend(transformers)
        return self

    def method_url(self, method: str) -> str:
        prefix = "test/" if self.environment == "test" else ""
        return f"{self.api_root}/bot{self.token}/{prefix}{method}"

    async def call(self, method: str, payload: Payload = None) -> ApiResponse:
        """Call a Bot API method and return the JSON envelope."""
        dispatch: Dispatch = self._raw_call
        for transformer in self._transformers:
            dispatch = _chain(transformer, dispatch)
        return await dispatch(method, payload)

    async def get_file(self, file_id: str) -> Dict[str, Any]:
        """Fetch file metadata; hydrated when ``hydrate_files`` is installed.

        Raises:
            TelegramApiError: the Bot API answered with ``ok: false``.
        """
        response = await self.call("getFile", {"file_id": file_id})
        if not response.get("ok"):
            raise TelegramApiError(
                "getFile",
                response.get("error_code", 0),
                response.get("description", ""),
            )
        return response["result"]

    async def _raw_call(self, method: str, payload: Payload = None) -> ApiResponse:
        try:
            return await self._post(method, payload)
        except RetryableError as e:
            # Out of attempts: the envelope is still a valid answer
            return e.response

    async def _post_once(self, method: str, payload: Payload) -> ApiResponse:
        response = await self._client.post(self.method_url(method), json=payload or {})
        try:
            result = response.json()
        except ValueError:
            result = {
                "ok": False,
                "error_code": response.status_code,
                "description": response.text[:200],
            }

        if result.get("ok"):
            return result

        error_code = result.get("error_code", 0) or 0
        if error_code == 429 or error_code >= 500:
            raise RetryableError(
                f"Telegram API {method}: retryable error {error_code}", result
            )
        logger.warning(
            f"Telegram API {method} failed: {result.get('description', result)}"
        )
        return result


def _chain(transformer: Transformer, prev: Dispatch) -> Dispatch:
    async def dispatch(method: str, payload: Payload = None) -> ApiResponse:
        return await transformer(prev, method, payload)

    return dispatch
