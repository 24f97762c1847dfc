"""Inlining of `$import` references."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

EXCLUDED_IMPORTS = frozenset({"ManifestBase"})

# Stripped from the imported copy, the importing node keeps its own.
_NON_INHERITED_KEYS = ("min_manifest_version", "max_manifest_version", "namespace", "id")


def resolve_imports(corpus: Any, value: Any = None) -> Any:
    """Return a copy of `value` with every `$import` replaced by its target.

    `corpus` is the read-only tree searched for import targets, usually the list of
    all parsed schema files. When `value` is omitted the corpus itself is resolved.
    Targets are looked up by the identifier after the last dot, first depth-first
    match wins.
    """
    if value is None:
        value = corpus
    return _resolve(corpus, value)


def find_id_or_namespace(value: Any, identifier: str) -> Mapping[str, Any] | None:
    """Depth-first search for the object whose `namespace` or `id` equals identifier."""
    if isinstance(value, Mapping):
        if value.get("namespace") == identifier or value.get("id") == identifier:
            return value
        children: Sequence[Any] = list(value.values())
    elif isinstance(value, list):
        children = value
    else:
        return None
    for child in children:
        found = find_id_or_namespace(child, identifier)
        if found is not None:
            return found
    return None


def merge_missing(destination: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Fill keys absent in destination from source, merging nested objects key by key."""
    for key, imported in source.items():
        if key not in destination:
            destination[key] = copy.deepcopy(imported)
            continue
        existing = destination[key]
        if isinstance(existing, dict) and isinstance(imported, Mapping):
            merge_missing(existing, imported)
    return destination


def _resolve(corpus: Any, value: Any, active: tuple[str, ...] = ()) -> Any:
    if isinstance(value, list):
        return [_resolve(corpus, item, active) for item in value]
    if not isinstance(value, Mapping):
        return value

    node = {
        key: _resolve(corpus, child, active) for key, child in value.items() if key != "$import"
    }
    reference = value.get("$import")
    if not isinstance(reference, str):
        return node

    identifier = reference.split(".")[-1]
    if identifier in EXCLUDED_IMPORTS:
        node["$import"] = reference
        return node
    if identifier in active:
        logger.warning("Skipping recursive import: %s", " -> ".join((*active, identifier)))
        return node

    target = find_id_or_namespace(corpus, identifier)
    if target is None:
        logger.warning("Missing requested import: %s", identifier)
        return node

    imported = {key: child for key, child in target.items() if key not in _NON_INHERITED_KEYS}
    # Nested imports inside the target are resolved before merging.
    return merge_missing(node, _resolve(corpus, imported, (*active, identifier)))
