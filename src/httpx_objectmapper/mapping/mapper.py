"""Entry points for mapping JSON into typed objects and back."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, TypeVar

from ..core.errors import MappingValueError, describe_json_type
from ..core.json_value import JsonArray, JsonObject, JsonValue
from .map import Map, construct, encode
from .mappable import BaseMappable, Mappable

T = TypeVar("T", bound=BaseMappable)
M = TypeVar("M", bound=Mappable)


class Mapper(Generic[T]):
    """Maps JSON values onto ``Mappable``/``ImmutableMappable`` types."""

    def __init__(self, context: object | None = None, *, include_none: bool = False) -> None:
        self.context = context
        self.include_none = include_none

    def map(self, json: JsonValue, cls: type[T]) -> T:
        return construct(json, cls, path="", context=self.context)

    def map_array(self, json: JsonValue, cls: type[T]) -> list[T]:
        """Map every element of a JSON array; one failing element fails the call."""

        if not isinstance(json, list):
            raise MappingValueError(
                f"expected array of {cls.__name__}, got {describe_json_type(json)}",
                path="",
                expected="array",
                actual=describe_json_type(json),
            )
        return [
            construct(item, cls, path=f"[{index}]", context=self.context)
            for index, item in enumerate(json)
        ]

    def map_to_object(self, json: JsonValue, instance: M) -> M:
        """Populate ``instance`` in place; absent fields keep their values."""

        if isinstance(json, dict):
            instance.mapping(Map(json, context=self.context))
        return instance

    def to_json(self, obj: BaseMappable) -> JsonObject:
        encoded = encode(obj, context=self.context, include_none=self.include_none)
        if not isinstance(encoded, dict):
            raise TypeError(f"{type(obj).__name__} does not encode to a JSON object")
        return encoded

    def to_json_array(self, objs: Iterable[BaseMappable]) -> JsonArray:
        return [self.to_json(obj) for obj in objs]


__all__ = [
    "Mapper",
]
