"""JSON value types and lenient body parsing."""

from __future__ import annotations

import json
from typing import Union

from .errors import serialization_failed_error

JsonValue = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]
JsonObject = dict[str, JsonValue]
JsonArray = list[JsonValue]


def parse_json(data: bytes, *, http_status: int | None = None) -> JsonValue:
    """Parse a response body; any top-level JSON value is accepted."""

    try:
        return json.loads(data)
    except (UnicodeDecodeError, ValueError) as exc:
        raise serialization_failed_error(
            http_status=http_status,
            reason=f"JSON could not be serialized: {exc}",
        ) from exc


__all__ = [
    "JsonValue",
    "JsonObject",
    "JsonArray",
    "parse_json",
]
