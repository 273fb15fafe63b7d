"""Client and formatter configuration."""

from __future__ import annotations

import keyword
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

DEFAULT_EMPTY_RESPONSE_CODES = frozenset({204, 205})
DEFAULT_EMPTY_REQUEST_METHODS = frozenset({"HEAD"})


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0
    follow_redirects: bool = True

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")
        if not isinstance(self.follow_redirects, bool):
            raise ValueError("transport.follow_redirects must be bool")


@dataclass(slots=True, frozen=True)
class SerializerConfig:
    """When an empty body counts as a valid response."""

    empty_response_codes: frozenset[int] = DEFAULT_EMPTY_RESPONSE_CODES
    empty_request_methods: frozenset[str] = DEFAULT_EMPTY_REQUEST_METHODS

    def __post_init__(self) -> None:
        object.__setattr__(self, "empty_response_codes", frozenset(self.empty_response_codes))
        object.__setattr__(
            self,
            "empty_request_methods",
            frozenset(method.upper() for method in self.empty_request_methods),
        )

    def validate(self) -> None:
        for code in self.empty_response_codes:
            if not isinstance(code, int) or isinstance(code, bool) or not 100 <= code <= 599:
                raise ValueError(f"serializer.empty_response_codes has invalid status {code!r}")
        for method in self.empty_request_methods:
            if not method:
                raise ValueError("serializer.empty_request_methods must not contain empty names")

    def allows_empty(self, *, method: str | None, status_code: int | None) -> bool:
        if status_code is not None and status_code in self.empty_response_codes:
            return True
        return method is not None and method.upper() in self.empty_request_methods


@dataclass(slots=True, frozen=True)
class ObjectMapperClientConfig:
    """Runtime configuration for the object mapper clients."""

    base_url: str = ""
    user_agent: str = "httpx-objectmapper/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    serializer: SerializerConfig = field(default_factory=SerializerConfig)

    def validate(self) -> None:
        if not isinstance(self.base_url, str):
            raise ValueError("base_url must be a string")
        if not self.user_agent:
            raise ValueError("user_agent must not be empty")
        self.transport.validate()
        self.serializer.validate()


FormatterField = tuple[str, Any]
FieldComparator = Callable[[FormatterField, FormatterField], int]


_NON_IDENTIFIER = re.compile(r"\W")


def python_identifier(key: str) -> str:
    """Turn a JSON key into a valid Python name: ``first-name`` -> ``first_name``,
    ``class`` -> ``class_``, ``1st`` -> ``_1st``.
    """

    name = _NON_IDENTIFIER.sub("_", key)
    if not name or name[0].isdigit():
        name = f"_{name}"
    if keyword.iskeyword(name):
        name = f"{name}_"
    return name


def capitalize_key(key: str) -> str:
    return python_identifier(key[:1].upper() + key[1:])


@dataclass(slots=True, frozen=True)
class FormatterConfig:
    """Naming and ordering policy for generated class stubs.

    ``comparator`` follows the ``cmp`` convention (negative, zero, positive);
    without one, fields keep the mapping's iteration order. The default naming
    hooks always yield valid identifiers; custom hooks must do the same for
    the generated source to compile.
    """

    comparator: FieldComparator | None = None
    variable_name: Callable[[str], str] = python_identifier
    class_name: Callable[[str], str] = capitalize_key
    indent: str = "    "

    def validate(self) -> None:
        if self.comparator is not None and not callable(self.comparator):
            raise ValueError("formatter.comparator must be callable")
        if not callable(self.variable_name):
            raise ValueError("formatter.variable_name must be callable")
        if not callable(self.class_name):
            raise ValueError("formatter.class_name must be callable")
        if not self.indent or self.indent.strip():
            raise ValueError("formatter.indent must be non-empty whitespace")


__all__ = [
    "DEFAULT_EMPTY_RESPONSE_CODES",
    "DEFAULT_EMPTY_REQUEST_METHODS",
    "TransportConfig",
    "SerializerConfig",
    "ObjectMapperClientConfig",
    "FormatterField",
    "FieldComparator",
    "python_identifier",
    "capitalize_key",
    "FormatterConfig",
]
