"""Error types for response mapping."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    EMPTY_BODY = "empty_body"
    DATA_SERIALIZATION_FAILED = "data_serialization_failed"


class ObjectMapperError(Exception):
    """Base exception for this package."""


class ConfigError(ObjectMapperError):
    """Invalid client or serializer configuration."""


class ClientClosedError(ObjectMapperError):
    """Raised when client is used after close."""


class MappingValueError(ObjectMapperError):
    """A field could not be read from JSON into the requested type."""

    def __init__(
        self,
        message: str,
        *,
        path: str,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.expected = expected
        self.actual = actual


class MappingError(ObjectMapperError):
    """Response could not be turned into the requested type."""

    def __init__(
        self,
        kind: ErrorKind,
        reason: str,
        *,
        cause: MappingValueError | None = None,
        http_status: int | None = None,
    ) -> None:
        super().__init__(reason)
        self.kind = kind
        self.reason = reason
        self.cause = cause
        self.http_status = http_status


def empty_body_error(*, http_status: int | None, reason: str | None = None) -> MappingError:
    return MappingError(
        ErrorKind.EMPTY_BODY,
        reason or "Data could not be serialized. Input data was empty.",
        http_status=http_status,
    )


def serialization_failed_error(
    *,
    http_status: int | None,
    cause: MappingValueError | None = None,
    reason: str | None = None,
) -> MappingError:
    message = reason or "ObjectMapper failed to serialize response."
    if cause is not None:
        message = f"{message} {cause}"
    return MappingError(
        ErrorKind.DATA_SERIALIZATION_FAILED,
        message,
        cause=cause,
        http_status=http_status,
    )


def describe_json_type(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "str"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


__all__ = [
    "ErrorKind",
    "ObjectMapperError",
    "ConfigError",
    "ClientClosedError",
    "MappingValueError",
    "MappingError",
    "empty_body_error",
    "serialization_failed_error",
    "describe_json_type",
]
