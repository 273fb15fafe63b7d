"""Class stub generation from sample JSON."""

from ..config import FormatterConfig
from .class_formatter import (
    by_key,
    find_substructures,
    format_class,
    serialize,
    stub_sample,
    type_label,
)

__all__ = [
    "FormatterConfig",
    "by_key",
    "find_substructures",
    "format_class",
    "serialize",
    "stub_sample",
    "type_label",
]
