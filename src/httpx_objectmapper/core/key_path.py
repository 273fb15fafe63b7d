"""Dotted key path lookups into parsed JSON documents."""

from __future__ import annotations

from typing import Final

from .json_value import JsonValue


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def extract(document: JsonValue, path: str | None) -> JsonValue | _Missing:
    """Return the subtree at ``path``, or ``MISSING`` when it does not resolve.

    Segments are object keys only; array indices and escaped dots are not
    supported.
    """

    if not path:
        return document

    current: JsonValue = document
    for segment in path.split("."):
        if not isinstance(current, dict) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def is_missing(value: object) -> bool:
    return value is MISSING


__all__ = [
    "MISSING",
    "extract",
    "is_missing",
]
