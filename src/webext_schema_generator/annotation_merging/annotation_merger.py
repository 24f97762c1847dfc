"""Overlay of annotation trees onto schema trees by structural identity."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from webext_schema_generator.version_filtering import MANIFEST_BOUND_KEYS

from .annotation_expansion import (
    expand_annotation_entries,
    expand_enum_entries,
    expand_enum_entry,
)
from .merge_errors import AnnotationMergeError

logger = logging.getLogger(__name__)

# Identity keys tried in order when matching annotation entries to schema entries.
IDENTITY_KEYS: tuple[str, ...] = ("namespace", "$extend", "name", "id")

MANIFEST_EXTENSION = "WebExtensionManifest"


class AnnotationMerger:
    """Merge one annotation tree into the schema tree of the same file.

    The merge returns a new tree and leaves both inputs untouched; subtrees
    the annotation does not touch are shared with the input schema. Keys
    introduced by the annotation are copied in and expanded, keys present in
    both trees are merged recursively and scalar annotation values replace
    the schema values. Every structural mismatch raises AnnotationMergeError.
    """

    def __init__(self, *, base_dir: Path, url_replacements: Mapping[str, str]) -> None:
        self._base_dir = base_dir
        self._url_replacements = url_replacements

    def merge(self, schema: Any, annotation: Any, base_path: str = "") -> Any:
        return self._merge_value(schema, annotation, base_path)

    def _merge_value(self, schema: Any, annotation: Any, path: str) -> Any:
        if isinstance(schema, list) and isinstance(annotation, list):
            return self._merge_list(schema, annotation, path)
        if isinstance(schema, Mapping) and isinstance(annotation, Mapping):
            return self._merge_object(schema, annotation, path)
        if _is_container(schema) or _is_container(annotation):
            raise AnnotationMergeError(
                f"Type mismatch at {path or '<root>'}: schema has {_kind(schema)}, "
                f"annotation has {_kind(annotation)}"
            )
        if _json_type(schema) != _json_type(annotation):
            raise AnnotationMergeError(
                f"Type mismatch at {path or '<root>'}: schema has {_json_type(schema)}, "
                f"annotation has {_json_type(annotation)}"
            )
        return copy.deepcopy(annotation)

    def _merge_object(
        self, schema: Mapping[str, Any], annotation: Mapping[str, Any], path: str
    ) -> dict[str, Any]:
        merged = dict(schema)
        for key, value in annotation.items():
            child_path = f"{path}.{key}" if path else key
            if key not in schema:
                merged[key] = self._expand_new(key, copy.deepcopy(value))
            elif key == "choices":
                merged[key] = self._merge_choices(schema[key], value, child_path)
            elif key == "annotations" and isinstance(schema[key], list) and isinstance(value, list):
                merged[key] = [*schema[key], *self._expand_new(key, copy.deepcopy(value))]
            elif key == "enums" and isinstance(schema[key], Mapping) and isinstance(value, Mapping):
                merged[key] = self._merge_enums(schema[key], value, child_path)
            else:
                merged[key] = self._merge_value(schema[key], value, child_path)
        return merged

    def _merge_choices(self, schema: Any, annotation: Any, path: str) -> list[Any]:
        if not isinstance(schema, list) or not isinstance(annotation, list):
            raise AnnotationMergeError(f"Type mismatch at {path}: choices must be arrays")
        if len(schema) != len(annotation):
            raise AnnotationMergeError(
                f"Choices length mismatch at {path}: schema has {len(schema)}, "
                f"annotation has {len(annotation)}"
            )
        return [
            self._merge_value(item, overlay, f"{path}[{position}]")
            for position, (item, overlay) in enumerate(zip(schema, annotation, strict=True))
        ]

    def _merge_enums(
        self, schema: Mapping[str, Any], annotation: Mapping[str, Any], path: str
    ) -> dict[str, Any]:
        merged = dict(schema)
        for value, entry in annotation.items():
            if value in schema:
                merged[value] = self._merge_value(schema[value], entry, f"{path}.{value}")
            else:
                merged[value] = expand_enum_entry(
                    copy.deepcopy(entry),
                    base_dir=self._base_dir,
                    url_replacements=self._url_replacements,
                )
        return merged

    def _merge_list(self, schema: list[Any], annotation: list[Any], path: str) -> list[Any]:
        merged = list(schema)
        for position, entry in enumerate(annotation):
            identity = _identity(entry)
            if identity is None:
                if position >= len(merged):
                    raise AnnotationMergeError(
                        f"Unmatched entry at {path}[{position}]: "
                        f"schema has only {len(merged)} entries"
                    )
                merged[position] = self._merge_value(merged[position], entry, f"{path}[{position}]")
                continue

            key, value = identity
            matches = [
                index
                for index, candidate in enumerate(merged)
                if isinstance(candidate, Mapping)
                and candidate.get(key) == value
                and _bounds_match(candidate, entry)
            ]
            if not matches:
                raise AnnotationMergeError(f"Unmatched entry at {path}: {key}={value!r}")
            if len(matches) > 1:
                logger.debug(
                    "annotation %s=%r at %s matches %d entries", key, value, path, len(matches)
                )
            for index in matches:
                overlay = _restrict_manifest_extension(entry, merged[index])
                merged[index] = self._merge_value(merged[index], overlay, f"{path}[{key}={value}]")
        return merged

    def _expand_new(self, key: str, value: Any) -> Any:
        if key == "annotations" and isinstance(value, list):
            return expand_annotation_entries(
                value, base_dir=self._base_dir, url_replacements=self._url_replacements
            )
        if key == "enums" and isinstance(value, Mapping):
            return expand_enum_entries(
                value, base_dir=self._base_dir, url_replacements=self._url_replacements
            )
        return value


def _identity(entry: Any) -> tuple[str, Any] | None:
    if not isinstance(entry, Mapping):
        return None
    for key in IDENTITY_KEYS:
        if entry.get(key):
            return key, entry[key]
    return None


def _bounds_match(candidate: Mapping[str, Any], entry: Mapping[str, Any]) -> bool:
    return all(
        candidate.get(bound) == entry[bound] for bound in MANIFEST_BOUND_KEYS if bound in entry
    )


def _restrict_manifest_extension(entry: Mapping[str, Any], target: Any) -> Mapping[str, Any]:
    """Shared manifest extensions only annotate properties the target defines."""
    if entry.get("$extend") != MANIFEST_EXTENSION:
        return entry
    if not isinstance(entry.get("properties"), Mapping):
        return entry
    defined = target.get("properties") if isinstance(target, Mapping) else None
    defined = defined if isinstance(defined, Mapping) else {}
    restricted = dict(entry)
    restricted["properties"] = {
        key: value for key, value in entry["properties"].items() if key in defined
    }
    return restricted


def _is_container(value: Any) -> bool:
    return isinstance(value, list | Mapping)


def _kind(value: Any) -> str:
    if isinstance(value, list):
        return "an array"
    if isinstance(value, Mapping):
        return "an object"
    return type(value).__name__


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    return _kind(value)
