"""Async data request with mapped-response handlers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

import httpx

from ..config import FormatterConfig, SerializerConfig
from ..mapping.mappable import BaseMappable, Mappable
from .dispatch import ExecutionContext
from .request_shared import (
    DataResponse,
    RequestOutcome,
    ResponseHandler,
    build_array_serializer,
    build_object_serializer,
    completed,
    dispatch_all,
    make_handler,
    transport_failure,
)
from .serializer import ClassStubResponseSerializer, ResponseSerializer

logger = logging.getLogger("httpx_objectmapper")

T = TypeVar("T", bound=BaseMappable)


class AsyncSender(Protocol):
    async def send(self, request: httpx.Request) -> httpx.Response: ...


class AsyncDataRequest:
    """Async counterpart of ``DataRequest``; ``resume()`` is awaited."""

    def __init__(
        self,
        sender: AsyncSender,
        request: httpx.Request,
        *,
        config: SerializerConfig | None = None,
        ensure_open: Callable[[], None] | None = None,
    ) -> None:
        self.request = request
        self._sender = sender
        self._config = config or SerializerConfig()
        self._ensure_open = ensure_open
        self._handlers: list[ResponseHandler] = []
        self._outcome: RequestOutcome | None = None
        self._send_lock = asyncio.Lock()

    @property
    def is_finished(self) -> bool:
        return self._outcome is not None

    def response(
        self,
        serializer: ResponseSerializer[Any],
        callback: Callable[[DataResponse[Any]], Any],
        *,
        execution_context: ExecutionContext | None = None,
    ) -> "AsyncDataRequest":
        handler = make_handler(serializer, callback, execution_context)
        if self._outcome is not None:
            dispatch_all(self.request, [handler], self._outcome)
        else:
            self._handlers.append(handler)
        return self

    def response_object(
        self,
        cls: type[T],
        callback: Callable[[DataResponse[T]], Any],
        *,
        key_path: str | None = None,
        map_to_object: Mappable | None = None,
        context: object | None = None,
        execution_context: ExecutionContext | None = None,
    ) -> "AsyncDataRequest":
        serializer = build_object_serializer(
            cls,
            key_path=key_path,
            map_to_object=map_to_object,
            context=context,
            config=self._config,
        )
        return self.response(serializer, callback, execution_context=execution_context)

    def response_array(
        self,
        cls: type[T],
        callback: Callable[[DataResponse[list[T]]], Any],
        *,
        key_path: str | None = None,
        context: object | None = None,
        execution_context: ExecutionContext | None = None,
    ) -> "AsyncDataRequest":
        serializer = build_array_serializer(
            cls,
            key_path=key_path,
            context=context,
            config=self._config,
        )
        return self.response(serializer, callback, execution_context=execution_context)

    def response_class_stub(
        self,
        class_name: str,
        callback: Callable[[DataResponse[str]], Any],
        *,
        key_path: str | None = None,
        include_substructures: bool = False,
        formatter_config: FormatterConfig | None = None,
        execution_context: ExecutionContext | None = None,
    ) -> "AsyncDataRequest":
        """Deliver ``Mappable`` stub source inferred from the response body."""

        serializer = ClassStubResponseSerializer(
            class_name,
            key_path=key_path,
            include_substructures=include_substructures,
            formatter_config=formatter_config,
        )
        return self.response(serializer, callback, execution_context=execution_context)

    async def resume(self) -> "AsyncDataRequest":
        """Send the request (once, even when awaited concurrently) and dispatch handlers."""

        async with self._send_lock:
            if self._outcome is None:
                if self._ensure_open is not None:
                    self._ensure_open()
                self._outcome = await self._perform()
        handlers, self._handlers = self._handlers, []
        dispatch_all(self.request, handlers, self._outcome)
        return self

    async def _perform(self) -> RequestOutcome:
        logger.debug("request start method=%s url=%s", self.request.method, self.request.url)
        try:
            response = await self._sender.send(self.request)
        except httpx.HTTPError as exc:
            return transport_failure(self.request, exc)
        return completed(self.request, response)


__all__ = [
    "AsyncSender",
    "AsyncDataRequest",
]
