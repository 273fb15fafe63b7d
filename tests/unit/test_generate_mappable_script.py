from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "generate_mappable.py"


@pytest.fixture(scope="module")
def script_main():
    spec = importlib.util.spec_from_file_location("generate_mappable", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module.main


def test_script_writes_sorted_stubs_for_key_path(tmp_path, script_main):
    source = tmp_path / "sample.json"
    source.write_text(json.dumps({"data": {"zeta": 1, "alpha": {"x": "y"}}}), encoding="utf-8")
    output = tmp_path / "models.py"

    code = script_main(
        [str(source), "--class-name", "Sample", "--key-path", "data", "--sort", "-o", str(output)]
    )

    text = output.read_text(encoding="utf-8")
    assert code == 0
    assert text.index("class Sample(Mappable):") < text.index("class Alpha(Mappable):")
    assert text.index("alpha: Alpha | None") < text.index("zeta: int | None")


def test_script_flat_prints_root_only(tmp_path, capsys, script_main):
    source = tmp_path / "sample.json"
    source.write_text(json.dumps({"alpha": {"x": "y"}}), encoding="utf-8")

    script_main([str(source), "--flat"])

    out = capsys.readouterr().out
    assert "class Root(Mappable):" in out
    assert "class Alpha" not in out


def test_script_rejects_non_object_sample(tmp_path, script_main):
    source = tmp_path / "sample.json"
    source.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(SystemExit):
        script_main([str(source)])


def test_script_samples_first_object_of_root_array(tmp_path, capsys, script_main):
    source = tmp_path / "sample.json"
    source.write_text(json.dumps([{"id": 1}, {"other": "x"}]), encoding="utf-8")

    assert script_main([str(source), "--class-name", "Item"]) == 0

    out = capsys.readouterr().out
    assert "class Item(Mappable):" in out
    assert "id: int | None = None" in out
    assert "other" not in out
