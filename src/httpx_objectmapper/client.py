"""Public client entrypoint."""

from __future__ import annotations

from types import TracebackType
from typing import Any

import httpx

from .client_shared import validate_client_config
from .config import ObjectMapperClientConfig
from .core.errors import ClientClosedError
from .core.request import DataRequest
from .core.transport_shared import build_client_kwargs


class ObjectMapperClient:
    """Issues requests whose responses are mapped onto typed objects.

    Usage::

        with ObjectMapperClient() as client:
            client.request("GET", url).response_object(Weather, on_weather).resume()
    """

    def __init__(
        self,
        *,
        config: ObjectMapperClientConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config or ObjectMapperClientConfig()
        validate_client_config(self._config)

        self._owns_client = client is None
        self._client = client or httpx.Client(**build_client_kwargs(self._config))
        self._closed = False

    @property
    def config(self) -> ObjectMapperClientConfig:
        return self._config

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("ObjectMapperClient is already closed")

    def request(self, method: str, url: httpx.URL | str, **kwargs: Any) -> DataRequest:
        """Build a request; nothing is sent until ``resume()``."""

        self._ensure_open()
        return DataRequest(
            self._client,
            self._client.build_request(method, url, **kwargs),
            config=self._config.serializer,
            ensure_open=self._ensure_open,
        )

    def close(self) -> None:
        if self._closed:
            return
        if self._owns_client:
            self._client.close()
        self._closed = True

    def __enter__(self) -> "ObjectMapperClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "ObjectMapperClient",
]
