from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import anyio
import httpx
import msgspec

from .errors import ApiError, HttpError, RequestAborted
from .logging import get_logger
from .settings import DEFAULT_API_ROOT, BotSettings

logger = get_logger(__name__)

__all__ = ["HttpBotClient"]


class HttpBotClient:
    """Bot API transport over HTTPS.

    Implements ``BotTransport``: every call is a JSON POST, the Bot API
    envelope is unwrapped, and failures raise instead of returning ``None``.
    """

    def __init__(
        self,
        token: str,
        *,
        api_root: str = DEFAULT_API_ROOT,
        timeout_s: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not token:
            raise ValueError("Telegram token is empty")
        self._base = f"{api_root.rstrip('/')}/bot{token}"
        self._client = http_client or httpx.AsyncClient(timeout=timeout_s)
        self._owns_client = http_client is None

    @classmethod
    def from_settings(
        cls,
        settings: BotSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> HttpBotClient:
        return cls(
            settings.bot_token,
            api_root=settings.api_root,
            timeout_s=settings.timeout_s,
            http_client=http_client,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpBotClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def call(
        self,
        method: str,
        params: Mapping[str, Any],
        *,
        signal: anyio.Event | None = None,
    ) -> Any:
        if signal is None:
            return await self._post(method, params)
        if signal.is_set():
            raise RequestAborted(method)

        result: Any = None
        completed = False
        error: Exception | None = None
        async with anyio.create_task_group() as tg:

            async def _abort_on_signal() -> None:
                await signal.wait()
                tg.cancel_scope.cancel()

            tg.start_soon(_abort_on_signal)
            try:
                result = await self._post(method, params)
                completed = True
            except Exception as exc:
                error = exc
            tg.cancel_scope.cancel()

        if error is not None:
            raise error
        if not completed:
            logger.debug("client.aborted", method=method)
            raise RequestAborted(method)
        return result

    async def _post(self, method: str, params: Mapping[str, Any]) -> Any:
        url = f"{self._base}/{method}"
        logger.debug("client.request", method=method)
        try:
            resp = await self._client.post(
                url,
                content=msgspec.json.encode(dict(params)),
                headers={"content-type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.warning(
                "client.network_error",
                method=method,
                error=str(e),
                error_type=e.__class__.__name__,
            )
            raise HttpError(method, str(e) or e.__class__.__name__) from e

        try:
            payload = msgspec.json.decode(resp.content)
        except msgspec.DecodeError as e:
            logger.warning(
                "client.bad_response",
                method=method,
                status=resp.status_code,
                error=str(e),
            )
            raise HttpError(
                method, f"status {resp.status_code}, body is not JSON"
            ) from e

        return self._parse_envelope(method=method, status=resp.status_code, payload=payload)

    def _parse_envelope(self, *, method: str, status: int, payload: Any) -> Any:
        if not isinstance(payload, dict):
            raise HttpError(method, f"status {status}, unexpected payload")
        if not payload.get("ok"):
            parameters = payload.get("parameters")
            error = ApiError(
                method,
                error_code=payload.get("error_code"),
                description=payload.get("description"),
                parameters=parameters if isinstance(parameters, dict) else None,
            )
            logger.info(
                "client.api_error",
                method=method,
                error_code=error.error_code,
                description=error.description,
                retry_after=error.retry_after,
            )
            raise error
        logger.debug("client.response", method=method)
        return payload.get("result")
