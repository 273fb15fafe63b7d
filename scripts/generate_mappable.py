"""Print Mappable class stubs inferred from a sample JSON document."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from httpx_objectmapper.config import FormatterConfig
from httpx_objectmapper.core.key_path import extract
from httpx_objectmapper.formatter import by_key, serialize, stub_sample


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("source", type=Path, help="JSON file holding a sample object")
    parser.add_argument("--class-name", default="Root", help="name of the root class")
    parser.add_argument("--key-path", default=None, help="dotted path to the sample object")
    parser.add_argument(
        "--flat",
        action="store_true",
        help="do not emit classes for nested objects",
    )
    parser.add_argument("--sort", action="store_true", help="order fields by key")
    parser.add_argument("-o", "--output", type=Path, default=None)
    args = parser.parse_args(argv)

    document = json.loads(args.source.read_text(encoding="utf-8"))
    sample = stub_sample(extract(document, args.key_path))
    if sample is None:
        parser.error("sample at key path must be a JSON object or a non-empty array of objects")

    config = FormatterConfig(comparator=by_key if args.sort else None)
    source = serialize(sample, args.class_name, not args.flat, config)
    if args.output is None:
        sys.stdout.write(source)
    else:
        args.output.write_text(source, encoding="utf-8", newline="\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
