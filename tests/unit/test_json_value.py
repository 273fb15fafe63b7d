from __future__ import annotations

import pytest

from httpx_objectmapper.core.errors import ErrorKind, MappingError
from httpx_objectmapper.core.json_value import parse_json


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b'{"a": 1}', {"a": 1}),
        (b"[1, 2]", [1, 2]),
        (b'"text"', "text"),
        (b"3.5", 3.5),
        (b"true", True),
        (b"null", None),
    ],
    ids=["object", "array", "string", "number", "bool", "null"],
)
def test_parse_json_accepts_any_top_level_value(data, expected):
    assert parse_json(data) == expected


@pytest.mark.parametrize("data", [b"{not json", b"\x80abc", b"[1,"])
def test_parse_json_wraps_decoder_errors(data):
    with pytest.raises(MappingError) as excinfo:
        parse_json(data, http_status=200)

    err = excinfo.value
    assert err.kind is ErrorKind.DATA_SERIALIZATION_FAILED
    assert err.http_status == 200
    assert err.reason.startswith("JSON could not be serialized")
    assert err.__cause__ is not None
