"""Response serializers turning raw bodies into mapped objects."""

from __future__ import annotations

import logging
from typing import Any, Generic, Protocol, TypeVar

import httpx

from ..config import FormatterConfig, SerializerConfig
from ..formatter.class_formatter import serialize as render_stubs
from ..formatter.class_formatter import stub_sample
from ..mapping.mappable import (
    BaseMappable,
    ImmutableMappable,
    Mappable,
    empty_value_of,
    has_empty_value,
)
from ..mapping.mapper import Mapper
from .errors import (
    MappingError,
    MappingValueError,
    empty_body_error,
    serialization_failed_error,
)
from .json_value import JsonValue, parse_json
from .key_path import MISSING, extract
from .result import Failure, Result, Success

logger = logging.getLogger("httpx_objectmapper")

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class ResponseSerializer(Protocol[T_co]):
    def serialize(
        self,
        request: httpx.Request | None,
        response: httpx.Response | None,
        data: bytes | None,
        error: BaseException | None,
    ) -> Result[T_co]: ...


class _NoEmptyValue(Exception):
    pass


def _passthrough(error: BaseException, http_status: int | None) -> Failure:
    logger.warning(
        "transport error passed through http_status=%s error=%s",
        http_status,
        error.__class__.__name__,
    )
    return Failure(error)


def _unexpected(exc: Exception, http_status: int | None) -> MappingError:
    return serialization_failed_error(
        http_status=http_status,
        reason=f"ObjectMapper failed to serialize response: {exc!r}",
    )


def _failed(error: MappingError, key_path: str | None) -> Failure:
    logger.warning(
        "response serialization failed kind=%s key_path=%s reason=%s",
        error.kind.value,
        key_path,
        error.reason,
    )
    return Failure(error)


def _absent(key_path: str | None) -> MappingValueError:
    return MappingValueError(
        f"no JSON value at key path '{key_path}'",
        path=key_path or "",
        expected="object",
        actual="missing",
    )


class ConstructStrategy:
    """Default-construct a ``Mappable`` then populate it."""

    def __init__(self, cls: type[Mappable]) -> None:
        self.cls = cls

    def map_object(self, json: Any, mapper: Mapper, key_path: str | None) -> Any:
        if json is MISSING:
            raise _absent(key_path)
        return mapper.map(json, self.cls)

    def map_array(self, json: Any, mapper: Mapper, key_path: str | None) -> list[Any]:
        if json is MISSING:
            raise _absent(key_path)
        return mapper.map_array(json, self.cls)

    def empty_value(self) -> Any:
        if not has_empty_value(self.cls):
            raise _NoEmptyValue(self.cls.__name__)
        return empty_value_of(self.cls)


class ImmutableStrategy(ConstructStrategy):
    """Construct an ``ImmutableMappable`` in one step from required fields."""

    def __init__(self, cls: type[ImmutableMappable]) -> None:
        self.cls = cls


class PopulateStrategy:
    """Populate a caller-owned ``Mappable`` instance in place."""

    def __init__(self, instance: Mappable) -> None:
        self.instance = instance

    def map_object(self, json: Any, mapper: Mapper, key_path: str | None) -> Any:
        return mapper.map_to_object(None if json is MISSING else json, self.instance)

    def map_array(self, json: Any, mapper: Mapper, key_path: str | None) -> list[Any]:
        raise TypeError("an existing instance cannot be populated from an array")

    def empty_value(self) -> Any:
        cls = type(self.instance)
        if not has_empty_value(cls):
            raise _NoEmptyValue(cls.__name__)
        return empty_value_of(cls)


MappingStrategy = ConstructStrategy | ImmutableStrategy | PopulateStrategy


def strategy_for(
    cls: type[BaseMappable],
    map_to_object: Mappable | None = None,
) -> MappingStrategy:
    """Select the mapping variant from the capability ``cls`` declares."""

    if map_to_object is not None:
        if not isinstance(map_to_object, Mappable):
            raise TypeError("map_to_object must be a Mappable instance")
        return PopulateStrategy(map_to_object)
    if isinstance(cls, type) and issubclass(cls, ImmutableMappable):
        return ImmutableStrategy(cls)
    if isinstance(cls, type) and issubclass(cls, Mappable):
        return ConstructStrategy(cls)
    raise TypeError(f"{cls!r} must subclass Mappable or ImmutableMappable")


class _MappingResponseSerializer(Generic[T]):
    def __init__(
        self,
        strategy: MappingStrategy,
        *,
        key_path: str | None = None,
        context: object | None = None,
        config: SerializerConfig | None = None,
    ) -> None:
        self.strategy = strategy
        self.key_path = key_path
        self.context = context
        self.config = config or SerializerConfig()

    def serialize(
        self,
        request: httpx.Request | None,
        response: httpx.Response | None,
        data: bytes | None,
        error: BaseException | None,
    ) -> Result[T]:
        http_status = response.status_code if response is not None else None
        if error is not None:
            return _passthrough(error, http_status)

        if not data:
            return self._serialize_empty(request, http_status)

        try:
            document = parse_json(data, http_status=http_status)
            extracted = extract(document, self.key_path)
            value = self._map(extracted, Mapper(self.context))
        except MappingError as exc:
            return self._fail(exc)
        except MappingValueError as exc:
            return self._fail(serialization_failed_error(http_status=http_status, cause=exc))
        except Exception as exc:
            return self._fail(_unexpected(exc, http_status))

        logger.debug(
            "response serialized key_path=%s http_status=%s", self.key_path, http_status
        )
        return Success(value)

    def _map(self, json: JsonValue, mapper: Mapper) -> T:
        raise NotImplementedError

    def _empty_value(self) -> T:
        raise NotImplementedError

    def _serialize_empty(self, request: httpx.Request | None, http_status: int | None) -> Result[T]:
        method = request.method if request is not None else None
        if not self.config.allows_empty(method=method, status_code=http_status):
            return self._fail(empty_body_error(http_status=http_status))
        try:
            value = self._empty_value()
        except _NoEmptyValue as exc:
            return self._fail(
                empty_body_error(
                    http_status=http_status,
                    reason=f"Empty response is not valid for type {exc}.",
                )
            )
        except Exception as exc:
            return self._fail(_unexpected(exc, http_status))
        logger.debug("empty response accepted method=%s http_status=%s", method, http_status)
        return Success(value)

    def _fail(self, error: MappingError) -> Failure:
        return _failed(error, self.key_path)


class ObjectResponseSerializer(_MappingResponseSerializer[T]):
    """Maps the body (or the value at ``key_path``) to a single object."""

    def _map(self, json: JsonValue, mapper: Mapper) -> T:
        return self.strategy.map_object(json, mapper, self.key_path)

    def _empty_value(self) -> T:
        return self.strategy.empty_value()


class ArrayResponseSerializer(_MappingResponseSerializer[list[T]]):
    """Maps a JSON array to a list; any failing element fails the whole call."""

    def __init__(
        self,
        strategy: MappingStrategy,
        *,
        key_path: str | None = None,
        context: object | None = None,
        config: SerializerConfig | None = None,
    ) -> None:
        if isinstance(strategy, PopulateStrategy):
            raise TypeError("array serializers cannot populate an existing instance")
        super().__init__(strategy, key_path=key_path, context=context, config=config)

    def _map(self, json: JsonValue, mapper: Mapper) -> list[T]:
        return self.strategy.map_array(json, mapper, self.key_path)

    def _empty_value(self) -> list[T]:
        return []


class ClassStubResponseSerializer:
    """Renders ``Mappable`` stub source for the body or the value at ``key_path``.

    An array of objects is sampled through its first element. Anything else
    that is not a JSON object fails with ``DATA_SERIALIZATION_FAILED``.
    """

    def __init__(
        self,
        class_name: str,
        *,
        key_path: str | None = None,
        include_substructures: bool = False,
        formatter_config: FormatterConfig | None = None,
    ) -> None:
        self.class_name = class_name
        self.key_path = key_path
        self.include_substructures = include_substructures
        self.formatter_config = formatter_config

    def serialize(
        self,
        request: httpx.Request | None,
        response: httpx.Response | None,
        data: bytes | None,
        error: BaseException | None,
    ) -> Result[str]:
        http_status = response.status_code if response is not None else None
        if error is not None:
            return _passthrough(error, http_status)
        if not data:
            return _failed(empty_body_error(http_status=http_status), self.key_path)

        try:
            document = parse_json(data, http_status=http_status)
            sample = stub_sample(extract(document, self.key_path))
            if sample is None:
                raise serialization_failed_error(
                    http_status=http_status,
                    reason="Could not convert response to dictionary.",
                )
            source = render_stubs(
                sample,
                self.class_name,
                self.include_substructures,
                self.formatter_config,
            )
        except MappingError as exc:
            return _failed(exc, self.key_path)
        except Exception as exc:
            return _failed(_unexpected(exc, http_status), self.key_path)

        logger.debug(
            "class stubs rendered class_name=%s key_path=%s", self.class_name, self.key_path
        )
        return Success(source)


__all__ = [
    "ResponseSerializer",
    "ConstructStrategy",
    "ImmutableStrategy",
    "PopulateStrategy",
    "MappingStrategy",
    "strategy_for",
    "ObjectResponseSerializer",
    "ArrayResponseSerializer",
    "ClassStubResponseSerializer",
]
