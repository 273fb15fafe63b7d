"""Declarative JSON object mapping."""

from .map import Map, MappingDirection
from .mappable import BaseMappable, ImmutableMappable, Mappable
from .mapper import Mapper

__all__ = [
    "Map",
    "MappingDirection",
    "BaseMappable",
    "Mappable",
    "ImmutableMappable",
    "Mapper",
]
