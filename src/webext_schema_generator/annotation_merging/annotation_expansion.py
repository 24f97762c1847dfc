"""Expansion of hand-authored annotation entries entering a schema."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from webext_schema_generator.description_rewriting import rewrite_markup

from .merge_errors import AnnotationMergeError

REWRITTEN_ANNOTATION_FIELDS = ("text", "hint", "note", "warning")

CODE_TYPES = {
    ".js": "JavaScript",
    ".mjs": "JavaScript",
    ".css": "CSS",
    ".json": "JSON",
}


def expand_annotation_entries(
    entries: list[Any], *, base_dir: Path, url_replacements: Mapping[str, str]
) -> list[Any]:
    return [
        expand_annotation_entry(entry, base_dir=base_dir, url_replacements=url_replacements)
        if isinstance(entry, Mapping)
        else entry
        for entry in entries
    ]


def expand_annotation_entry(
    entry: Mapping[str, Any], *, base_dir: Path, url_replacements: Mapping[str, str]
) -> dict[str, Any]:
    """Rewrite the markup of one annotation entry and inline its code example."""
    expanded = dict(entry)
    for field_name in REWRITTEN_ANNOTATION_FIELDS:
        if isinstance(expanded.get(field_name), str):
            expanded[field_name] = rewrite_markup(expanded[field_name], url_replacements)
    if isinstance(expanded.get("list"), list):
        expanded["list"] = [
            rewrite_markup(item, url_replacements) if isinstance(item, str) else item
            for item in expanded["list"]
        ]
    # A code entry holding a list has already been read.
    if isinstance(expanded.get("code"), str):
        code_path = base_dir / expanded["code"]
        expanded["code"] = read_code_lines(code_path)
        if "type" not in expanded and code_path.suffix.lower() in CODE_TYPES:
            expanded["type"] = CODE_TYPES[code_path.suffix.lower()]
    return expanded


def expand_enum_entries(
    enums: Mapping[str, Any], *, base_dir: Path, url_replacements: Mapping[str, str]
) -> dict[str, Any]:
    return {
        value: expand_enum_entry(entry, base_dir=base_dir, url_replacements=url_replacements)
        for value, entry in enums.items()
    }


def expand_enum_entry(
    entry: Any, *, base_dir: Path, url_replacements: Mapping[str, str]
) -> Any:
    if not isinstance(entry, Mapping) or not isinstance(entry.get("annotations"), list):
        return entry
    expanded = dict(entry)
    expanded["annotations"] = expand_annotation_entries(
        entry["annotations"], base_dir=base_dir, url_replacements=url_replacements
    )
    return expanded


def read_code_lines(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise AnnotationMergeError(f"Failed to read code example {path}: {exc}") from exc
