"""Public async client entrypoint."""

from __future__ import annotations

from types import TracebackType
from typing import Any

import httpx

from .client_shared import validate_client_config
from .config import ObjectMapperClientConfig
from .core.async_request import AsyncDataRequest
from .core.errors import ClientClosedError
from .core.transport_shared import build_client_kwargs


class AsyncObjectMapperClient:
    """Async client; requests are sent by awaiting ``resume()``."""

    def __init__(
        self,
        *,
        config: ObjectMapperClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or ObjectMapperClientConfig()
        validate_client_config(self._config)

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(**build_client_kwargs(self._config))
        self._closed = False

    @property
    def config(self) -> ObjectMapperClientConfig:
        return self._config

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("AsyncObjectMapperClient is already closed")

    def request(self, method: str, url: httpx.URL | str, **kwargs: Any) -> AsyncDataRequest:
        self._ensure_open()
        return AsyncDataRequest(
            self._client,
            self._client.build_request(method, url, **kwargs),
            config=self._config.serializer,
            ensure_open=self._ensure_open,
        )

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncObjectMapperClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncObjectMapperClient",
]
