"""Shared helpers for sync/async data requests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx

from ..config import SerializerConfig
from ..mapping.mappable import BaseMappable, Mappable
from .dispatch import DEFAULT_CONTEXT, ExecutionContext
from .result import Result
from .serializer import (
    ArrayResponseSerializer,
    ObjectResponseSerializer,
    ResponseSerializer,
    strategy_for,
)

logger = logging.getLogger("httpx_objectmapper")

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class DataResponse(Generic[T]):
    """What a completion callback receives."""

    request: httpx.Request
    response: httpx.Response | None
    data: bytes | None
    result: Result[T]

    @property
    def value(self) -> T | None:
        return self.result.value

    @property
    def error(self) -> BaseException | None:
        return self.result.error


@dataclass(slots=True, frozen=True)
class RequestOutcome:
    response: httpx.Response | None
    data: bytes | None
    error: BaseException | None


@dataclass(slots=True, frozen=True)
class ResponseHandler:
    serializer: ResponseSerializer[Any]
    callback: Callable[[DataResponse[Any]], Any]
    execution_context: ExecutionContext


def make_handler(
    serializer: ResponseSerializer[Any],
    callback: Callable[[DataResponse[Any]], Any],
    execution_context: ExecutionContext | None,
) -> ResponseHandler:
    return ResponseHandler(
        serializer=serializer,
        callback=callback,
        execution_context=execution_context or DEFAULT_CONTEXT,
    )


def build_object_serializer(
    cls: type[BaseMappable],
    *,
    key_path: str | None,
    map_to_object: Mappable | None,
    context: object | None,
    config: SerializerConfig,
) -> ObjectResponseSerializer[Any]:
    return ObjectResponseSerializer(
        strategy_for(cls, map_to_object),
        key_path=key_path,
        context=context,
        config=config,
    )


def build_array_serializer(
    cls: type[BaseMappable],
    *,
    key_path: str | None,
    context: object | None,
    config: SerializerConfig,
) -> ArrayResponseSerializer[Any]:
    return ArrayResponseSerializer(
        strategy_for(cls),
        key_path=key_path,
        context=context,
        config=config,
    )


def dispatch(request: httpx.Request, handler: ResponseHandler, outcome: RequestOutcome) -> None:
    """Serialize the outcome and hand the result to the handler's context."""

    result = handler.serializer.serialize(
        request,
        outcome.response,
        outcome.data,
        outcome.error,
    )
    data_response: DataResponse[Any] = DataResponse(
        request=request,
        response=outcome.response,
        data=outcome.data,
        result=result,
    )
    handler.execution_context.submit(handler.callback, data_response)


def dispatch_all(
    request: httpx.Request,
    handlers: Iterable[ResponseHandler],
    outcome: RequestOutcome,
) -> None:
    """Dispatch every handler; the first callback error is re-raised afterwards."""

    first_error: Exception | None = None
    for handler in handlers:
        try:
            dispatch(request, handler, outcome)
        except Exception as exc:
            logger.exception(
                "response handler failed method=%s url=%s",
                request.method,
                request.url,
            )
            if first_error is None:
                first_error = exc
    if first_error is not None:
        raise first_error


def transport_failure(request: httpx.Request, exc: httpx.HTTPError) -> RequestOutcome:
    logger.error(
        "request transport error method=%s url=%s error=%s",
        request.method,
        request.url,
        exc.__class__.__name__,
    )
    return RequestOutcome(response=None, data=None, error=exc)


def completed(request: httpx.Request, response: httpx.Response) -> RequestOutcome:
    logger.info(
        "request completed method=%s url=%s http_status=%s",
        request.method,
        request.url,
        response.status_code,
    )
    return RequestOutcome(response=response, data=response.content, error=None)


__all__ = [
    "DataResponse",
    "RequestOutcome",
    "ResponseHandler",
    "make_handler",
    "build_object_serializer",
    "build_array_serializer",
    "dispatch",
    "dispatch_all",
    "transport_failure",
    "completed",
]
