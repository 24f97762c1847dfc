"""Output writer tests."""

from __future__ import annotations

import json
from pathlib import Path

from webext_schema_generator.results_writing import (
    sort_keys,
    with_application_version,
    write_schema_files,
)
from webext_schema_generator.schema_management import SchemaFile, SchemaInfo, SchemaOwner


def _info(name: str, schema: list) -> SchemaInfo:
    return SchemaInfo(
        file=SchemaFile(name=name, directory=Path("schemas")),
        owner=SchemaOwner.THUNDERBIRD,
        schema=schema,
    )


def test_sort_keys_orders_every_level_and_is_idempotent() -> None:
    value = [{"b": {"z": 1, "a": [{"y": 2, "x": 1}]}, "a": "first"}]

    once = sort_keys(value)

    assert json.dumps(once) == '[{"a": "first", "b": {"a": [{"x": 1, "y": 2}], "z": 1}}]'
    assert json.dumps(sort_keys(once)) == json.dumps(once)


def test_application_version_goes_into_the_manifest_namespace() -> None:
    schema = [{"namespace": "manifest", "types": []}, {"namespace": "compose"}]

    updated = with_application_version(schema, "128.0")

    assert updated[0] == {"namespace": "manifest", "types": [], "applicationVersion": "128.0"}
    assert "applicationVersion" not in schema[0]


def test_application_version_is_appended_without_manifest_namespace() -> None:
    updated = with_application_version([{"namespace": "compose"}], "128.0")

    assert updated[-1] == {"namespace": "manifest", "applicationVersion": "128.0"}


def test_output_folder_is_cleared_and_files_are_pretty_printed(tmp_path: Path) -> None:
    output = tmp_path / "out"
    output.mkdir()
    (output / "stale.json").write_text("[]", encoding="utf-8")

    written = write_schema_files(
        [_info("compose.json", [{"namespace": "compose", "description": "Compose äöü"}])],
        output,
        application_version="128.0",
    )

    assert written == [output / "compose.json"]
    assert not (output / "stale.json").exists()
    text = (output / "compose.json").read_text(encoding="utf-8")
    assert text.startswith('[\n    {\n        "description": "Compose äöü",')
    assert json.loads(text)[-1] == {"applicationVersion": "128.0", "namespace": "manifest"}
