"""Generate ``Mappable`` class stubs from sample JSON objects."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from functools import cmp_to_key
from json import dumps
from typing import Any

from ..config import FormatterConfig, FormatterField

Substructure = tuple[str, Mapping[str, Any]]

ANY_LABEL = "Any"
DATETIME_LABEL = "datetime"
_DEFAULT_CONFIG = FormatterConfig()


def by_key(left: FormatterField, right: FormatterField) -> int:
    """Comparator ordering fields alphabetically by JSON key."""

    return (left[0] > right[0]) - (left[0] < right[0])


def _is_object_list(value: object) -> bool:
    return isinstance(value, list) and all(isinstance(item, Mapping) for item in value)


def _is_nested_list(value: object) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(item, list) for item in value)


def type_label(key: str, value: object, config: FormatterConfig = _DEFAULT_CONFIG) -> str:
    """Infer the annotation used for ``key`` from its sample ``value``."""

    if isinstance(value, str):
        return "str"
    # bool is an int subclass
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, Mapping):
        return config.class_name(key)
    if _is_object_list(value):
        return f"list[{config.class_name(key)}]"
    if _is_nested_list(value):
        return f"list[list[{ANY_LABEL}]]"
    if isinstance(value, list):
        return f"list[{ANY_LABEL}]"
    if isinstance(value, (datetime, date)):
        return DATETIME_LABEL
    return ANY_LABEL


def find_substructures(
    root_name: str,
    json: Mapping[str, Any],
    config: FormatterConfig = _DEFAULT_CONFIG,
) -> list[Substructure]:
    """Flatten nested objects into ``(class name, sample object)`` pairs.

    Root comes first, then descendants depth-first in key order. An array
    of objects is represented by its first element; an empty array yields
    an empty object.
    """

    structures: list[Substructure] = []
    pending: list[Substructure] = [(root_name, json)]
    while pending:
        name, current = pending.pop()
        structures.append((name, current))
        children: list[Substructure] = []
        for key, value in current.items():
            if isinstance(value, Mapping):
                children.append((config.class_name(key), value))
            elif _is_object_list(value):
                children.append((config.class_name(key), value[0] if value else {}))
        pending.extend(reversed(children))
    return structures


def stub_sample(value: object) -> Mapping[str, Any] | None:
    """Pick the object stubs are generated from: the value itself when it is an
    object, or the first element of a non-empty array of objects.
    """

    if isinstance(value, Mapping):
        return value
    if isinstance(value, list) and value and isinstance(value[0], Mapping):
        return value[0]
    return None


def sorted_fields(
    json: Mapping[str, Any],
    config: FormatterConfig = _DEFAULT_CONFIG,
) -> list[FormatterField]:
    fields = list(json.items())
    if config.comparator is not None:
        fields.sort(key=cmp_to_key(config.comparator))
    return fields


def longest_key_length(json: Mapping[str, Any], config: FormatterConfig = _DEFAULT_CONFIG) -> int:
    return max((len(config.variable_name(key)) for key in json), default=0)


def format_class(
    class_name: str,
    json: Mapping[str, Any],
    config: FormatterConfig = _DEFAULT_CONFIG,
) -> str:
    """Render one ``Mappable`` subclass for a sample object."""

    pad = config.indent
    longest = longest_key_length(json, config)
    fields = [
        (key, config.variable_name(key), type_label(key, value, config))
        for key, value in sorted_fields(json, config)
    ]

    lines = [f"class {class_name}(Mappable):", f"{pad}# Properties", ""]
    for _, name, label in fields:
        lines.append(f"{pad}{name}: {label} | None = None")
    if fields:
        lines.append("")

    lines += [
        f"{pad}# Init",
        "",
        f"{pad}def __init__(self) -> None:",
        f"{pad}{pad}pass",
        "",
        f"{pad}# Mappable",
        "",
        f"{pad}def mapping(self, map: Map) -> None:",
    ]
    for key, name, label in fields:
        target = f"self.{name.ljust(longest)}"
        arguments = f"{dumps(key)}, self.{name}"
        if label != ANY_LABEL:
            arguments += f", {label}"
        lines.append(f"{pad}{pad}{target} = map.get({arguments})")
    if not fields:
        lines.append(f"{pad}{pad}pass")
    return "\n".join(lines)


def _uses(name: str, labels: set[str]) -> bool:
    pattern = re.compile(rf"\b{name}\b")
    return any(pattern.search(label) for label in labels)


def _header(labels: set[str]) -> str:
    lines = ["from __future__ import annotations", ""]
    if _uses(DATETIME_LABEL, labels):
        lines.append("from datetime import datetime")
    if _uses(ANY_LABEL, labels):
        lines.append("from typing import Any")
    if len(lines) > 2:
        lines.append("")
    lines.append("from httpx_objectmapper import Map, Mappable")
    return "\n".join(lines)


def serialize(
    json: Mapping[str, Any],
    root_class_name: str,
    include_substructures: bool,
    config: FormatterConfig | None = None,
) -> str:
    """Render stubs for ``json``, root class first, as one module's source."""

    config = config or _DEFAULT_CONFIG
    if include_substructures:
        structures = find_substructures(root_class_name, json, config)
    else:
        structures = [(root_class_name, json)]

    labels = {
        type_label(key, value, config)
        for _, structure in structures
        for key, value in structure.items()
    }
    blocks = [_header(labels)]
    blocks.extend(format_class(name, structure, config) for name, structure in structures)
    return "\n\n\n".join(blocks) + "\n"


__all__ = [
    "Substructure",
    "ANY_LABEL",
    "DATETIME_LABEL",
    "by_key",
    "type_label",
    "find_substructures",
    "stub_sample",
    "sorted_fields",
    "longest_key_length",
    "format_class",
    "serialize",
]
