"""Reading of schema, annotation and placeholder files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .schema_models import SchemaFile, SchemaInfo, SchemaOwner

logger = logging.getLogger(__name__)


class SchemaError(Exception):
    """Raised when a schema related file cannot be read or parsed."""


def parse_schema_text(text: str, *, source: str = "<memory>") -> list[Any]:
    """Parse a schema file, ignoring the license comment in front of the JSON array."""
    start = text.find("[")
    if start == -1:
        raise SchemaError(f"Schema file {source} does not contain a JSON array.")
    try:
        parsed = json.loads(text[start:])
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid schema file {source}: {exc}") from exc
    if not isinstance(parsed, list):  # pragma: no cover - guarded by the slice above
        raise SchemaError(f"Schema file {source} must contain a JSON array.")
    return parsed


def read_json_document(path: Path) -> Any:
    """Read a plain JSON document such as the placeholder map or compat data."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SchemaError(f"Failed to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid JSON in {path}: {exc}") from exc


def list_json_files(directory: Path) -> list[SchemaFile]:
    """Return the JSON files directly inside a folder, sorted by name."""
    if not directory.is_dir():
        raise SchemaError(f"Schema folder not found: {directory}")
    return [
        SchemaFile(name=entry.name, directory=directory)
        for entry in sorted(directory.iterdir())
        if entry.is_file() and entry.suffix.lower() == ".json"
    ]


def read_schema_file(schema_file: SchemaFile) -> list[Any]:
    try:
        text = schema_file.path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaError(f"Failed to read {schema_file.path}: {exc}") from exc
    return parse_schema_text(text, source=str(schema_file.path))


def read_schema_folder(directory: Path, owner: SchemaOwner) -> list[SchemaInfo]:
    """Read every schema file of one folder for the given owner."""
    infos = [
        SchemaInfo(file=schema_file, owner=owner, schema=read_schema_file(schema_file))
        for schema_file in list_json_files(directory)
    ]
    logger.info("read %d %s schema files from %s", len(infos), owner.value, directory)
    return infos
