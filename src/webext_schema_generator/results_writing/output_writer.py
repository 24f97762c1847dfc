"""Generated schema writer service."""

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from webext_schema_generator.schema_management import SchemaInfo

logger = logging.getLogger(__name__)

MANIFEST_NAMESPACE = "manifest"


def sort_keys(value: Any) -> Any:
    """Recursively order object keys, arrays keep their order."""
    if isinstance(value, list):
        return [sort_keys(item) for item in value]
    if isinstance(value, Mapping):
        return {key: sort_keys(value[key]) for key in sorted(value)}
    return value


def with_application_version(schema: list[Any], application_version: str) -> list[Any]:
    """Record the application version in the manifest namespace entry of a schema."""
    result = list(schema)
    for position, entry in enumerate(result):
        if isinstance(entry, Mapping) and entry.get("namespace") == MANIFEST_NAMESPACE:
            result[position] = {**entry, "applicationVersion": application_version}
            return result
    result.append({"namespace": MANIFEST_NAMESPACE, "applicationVersion": application_version})
    return result


def prepare_output_dir(output_dir: Path) -> Path:
    """Clear the output folder, previous results must not survive a run."""
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True)
    return output_dir


def write_pretty_json(path: Path, document: Any) -> None:
    text = json.dumps(document, indent=4, ensure_ascii=False)
    path.write_text(text + "\n", encoding="utf-8")


def write_schema_files(
    schemas: list[SchemaInfo],
    output_dir: Path,
    *,
    application_version: str | None = None,
) -> list[Path]:
    """Write one sorted JSON file per schema into a freshly cleared folder."""
    prepare_output_dir(output_dir)
    written: list[Path] = []
    for info in schemas:
        schema = info.schema
        if application_version is not None:
            schema = with_application_version(schema, application_version)
        target = output_dir / info.file.name
        write_pretty_json(target, sort_keys(schema))
        written.append(target)
    logger.info("wrote %d schema files to %s", len(written), output_dir)
    return written
