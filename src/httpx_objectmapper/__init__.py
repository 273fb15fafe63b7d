"""Public package exports for httpx-objectmapper."""

from .async_client import AsyncObjectMapperClient
from .client import ObjectMapperClient
from .config import FormatterConfig, ObjectMapperClientConfig, SerializerConfig, TransportConfig
from .core.dispatch import ImmediateContext, LoopContext
from .core.errors import ErrorKind, MappingError, MappingValueError
from .core.key_path import extract
from .core.request_shared import DataResponse
from .core.result import Failure, Success
from .mapping import ImmutableMappable, Map, Mappable, Mapper

__all__ = [
    "ObjectMapperClient",
    "AsyncObjectMapperClient",
    "ObjectMapperClientConfig",
    "SerializerConfig",
    "TransportConfig",
    "FormatterConfig",
    "ImmediateContext",
    "LoopContext",
    "ErrorKind",
    "MappingError",
    "MappingValueError",
    "extract",
    "DataResponse",
    "Success",
    "Failure",
    "Map",
    "Mappable",
    "ImmutableMappable",
    "Mapper",
]
