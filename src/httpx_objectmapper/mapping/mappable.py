"""Mapping capabilities a target type can declare."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .map import Map


class BaseMappable:
    """Common root of every type the mapper knows how to build."""

    __slots__ = ()

    def mapping(self, map: "Map") -> None:
        raise NotImplementedError(f"{type(self).__name__} does not declare mapping()")


class Mappable(BaseMappable):
    """Default-constructible type populated field by field after creation.

    Subclasses must be constructible without arguments and implement
    ``mapping``, which runs in both directions::

        def mapping(self, map):
            self.location = map.get("location", self.location, str)
    """

    __slots__ = ()

    @classmethod
    def accepts(cls, map: "Map") -> bool:
        """Return False to refuse building an instance from this object."""

        return True


class ImmutableMappable(BaseMappable):
    """Type built in one step from required fields.

    ``__init__(self, map)`` reads fields with ``map.value(...)`` and lets
    ``MappingValueError`` propagate when a field is missing or mistyped.
    ``mapping`` is only needed for the to-JSON direction.
    """

    __slots__ = ()

    def __init__(self, map: "Map") -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement __init__(map)")


def has_empty_value(cls: type[Any]) -> bool:
    return callable(getattr(cls, "empty_value", None))


def empty_value_of(cls: type[Any]) -> Any:
    return cls.empty_value()


__all__ = [
    "BaseMappable",
    "Mappable",
    "ImmutableMappable",
    "has_empty_value",
    "empty_value_of",
]
