"""Field-level access to a JSON object in either mapping direction."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, get_args, get_origin

from ..core.errors import MappingValueError, describe_json_type
from ..core.json_value import JsonObject, JsonValue
from ..core.key_path import MISSING, extract
from .mappable import BaseMappable, ImmutableMappable, Mappable

logger = logging.getLogger("httpx_objectmapper")


class MappingDirection(str, Enum):
    FROM_JSON = "from_json"
    TO_JSON = "to_json"


class Map:
    """View over one JSON object handed to a type's mapping code."""

    def __init__(
        self,
        json: JsonObject,
        *,
        context: object | None = None,
        direction: MappingDirection = MappingDirection.FROM_JSON,
        path: str = "",
        include_none: bool = False,
    ) -> None:
        self.json = json
        self.context = context
        self.direction = direction
        self.path = path
        self.include_none = include_none

    def __contains__(self, key: str) -> bool:
        return extract(self.json, key) is not MISSING

    def get(self, key: str, default: Any = None, type_: Any = None) -> Any:
        """Optional field: the converted value if present, otherwise ``default``.

        In the to-JSON direction ``default`` is written under ``key`` and
        returned unchanged.
        """

        if self.direction is MappingDirection.TO_JSON:
            self._write(key, default)
            return default

        raw = extract(self.json, key)
        if raw is MISSING:
            return default
        if raw is None:
            return None
        try:
            return convert(raw, type_, path=self._child_path(key), context=self.context)
        except MappingValueError as exc:
            logger.debug("optional field skipped path=%s error=%s", exc.path, exc)
            return default

    def value(self, key: str, type_: Any = None) -> Any:
        """Required field; raises ``MappingValueError`` when absent or mistyped."""

        path = self._child_path(key)
        raw = extract(self.json, key)
        if raw is MISSING:
            raise MappingValueError(
                f"missing required field '{path}'",
                path=path,
                expected=type_name(type_),
                actual="missing",
            )
        if raw is None:
            raise MappingValueError(
                f"required field '{path}' is null",
                path=path,
                expected=type_name(type_),
                actual="null",
            )
        return convert(raw, type_, path=path, context=self.context)

    def _child_path(self, key: str) -> str:
        return f"{self.path}.{key}" if self.path else key

    def _write(self, key: str, value: Any) -> None:
        if value is None and not self.include_none:
            return
        encoded = encode(value, context=self.context, include_none=self.include_none)
        target = self.json
        segments = key.split(".")
        for segment in segments[:-1]:
            child = target.get(segment)
            if not isinstance(child, dict):
                child = {}
                target[segment] = child
            target = child
        target[segments[-1]] = encoded


def type_name(type_: Any) -> str | None:
    if type_ is None:
        return None
    if get_origin(type_) is not None:
        return repr(type_)
    return getattr(type_, "__name__", repr(type_))


def _mismatch(path: str, type_: Any, raw: object) -> MappingValueError:
    expected = type_name(type_)
    actual = describe_json_type(raw)
    return MappingValueError(
        f"field '{path}' expected {expected}, got {actual}",
        path=path,
        expected=expected,
        actual=actual,
    )


def convert(raw: JsonValue, type_: Any, *, path: str, context: object | None) -> Any:
    """Convert one JSON value into ``type_`` or raise ``MappingValueError``."""

    if type_ is None or type_ is Any:
        return raw

    origin = get_origin(type_)
    if origin is list:
        (item_type,) = get_args(type_) or (None,)
        if not isinstance(raw, list):
            raise _mismatch(path, type_, raw)
        return [
            convert(item, item_type, path=f"{path}[{index}]", context=context)
            for index, item in enumerate(raw)
        ]
    if origin is dict:
        args = get_args(type_)
        value_type = args[1] if len(args) == 2 else None
        if not isinstance(raw, dict):
            raise _mismatch(path, type_, raw)
        return {
            key: convert(item, value_type, path=f"{path}.{key}", context=context)
            for key, item in raw.items()
        }

    if isinstance(type_, type) and issubclass(type_, BaseMappable):
        return construct(raw, type_, path=path, context=context)

    if type_ is bool:
        if isinstance(raw, bool):
            return raw
        raise _mismatch(path, type_, raw)
    if type_ is int:
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
        raise _mismatch(path, type_, raw)
    if type_ is float:
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return float(raw)
        raise _mismatch(path, type_, raw)
    if type_ is str:
        if isinstance(raw, str):
            return raw
        raise _mismatch(path, type_, raw)
    if type_ is datetime:
        if isinstance(raw, str):
            try:
                return datetime.fromisoformat(raw.replace("Z", "+00:00"))
            except ValueError:
                pass
        raise _mismatch(path, type_, raw)

    if isinstance(type_, type) and isinstance(raw, type_):
        return raw
    raise _mismatch(path, type_, raw)


def construct(raw: JsonValue, cls: type[Any], *, path: str, context: object | None) -> Any:
    """Build a new ``Mappable`` or ``ImmutableMappable`` instance from an object."""

    if not isinstance(raw, dict):
        raise MappingValueError(
            f"'{path or '<root>'}' expected object for {cls.__name__}, "
            f"got {describe_json_type(raw)}",
            path=path,
            expected="object",
            actual=describe_json_type(raw),
        )
    field_map = Map(raw, context=context, path=path)
    if issubclass(cls, ImmutableMappable):
        return cls(field_map)
    if issubclass(cls, Mappable):
        if not cls.accepts(field_map):
            raise MappingValueError(
                f"{cls.__name__} refused object at '{path or '<root>'}'",
                path=path,
                expected=cls.__name__,
                actual="object",
            )
        instance = cls()
        instance.mapping(field_map)
        return instance
    raise TypeError(f"{cls.__name__} is neither Mappable nor ImmutableMappable")


def encode(value: Any, *, context: object | None, include_none: bool) -> JsonValue:
    if isinstance(value, BaseMappable):
        output: JsonObject = {}
        value.mapping(
            Map(
                output,
                context=context,
                direction=MappingDirection.TO_JSON,
                include_none=include_none,
            )
        )
        return output
    if isinstance(value, (list, tuple)):
        return [encode(item, context=context, include_none=include_none) for item in value]
    if isinstance(value, Mapping):
        return {
            str(key): encode(item, context=context, include_none=include_none)
            for key, item in value.items()
        }
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


__all__ = [
    "MappingDirection",
    "Map",
    "convert",
    "construct",
    "encode",
    "type_name",
]
