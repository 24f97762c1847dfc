"""Manifest-version filtering and choice collapsing."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from webext_schema_generator.address_tracking import enum_value

MANIFEST_BOUND_KEYS = ("min_manifest_version", "max_manifest_version")


def is_in_version_range(node: Any, manifest_version: int) -> bool:
    """Whether a node survives filtering for the requested manifest version."""
    if not isinstance(node, Mapping):
        return True
    minimum = node.get("min_manifest_version")
    maximum = node.get("max_manifest_version")
    if minimum and int(minimum) > manifest_version:
        return False
    if maximum and int(maximum) < manifest_version:
        return False
    return True


def filter_elements(items: list[Any], manifest_version: int) -> list[Any]:
    return [item for item in items if is_in_version_range(item, manifest_version)]


def filter_properties(node: Mapping[str, Any], manifest_version: int) -> dict[str, Any]:
    return {
        key: value for key, value in node.items() if is_in_version_range(value, manifest_version)
    }


def collapse_choices(node: dict[str, Any], manifest_version: int) -> dict[str, Any]:
    """Filter `choices` and collapse what only existed to express version alternatives.

    Nothing is merged unless filtering removed at least one choice: enum-only
    survivors are merged into a single choice with the sorted union of their enums,
    and a single survivor is inlined into the node.
    """
    choices = node.get("choices")
    if not isinstance(choices, list) or node.get("$extend"):
        return node

    survivors = filter_elements(choices, manifest_version)
    collapsed = dict(node)
    if len(survivors) == len(choices):
        collapsed["choices"] = survivors
        return collapsed

    if survivors and all(
        isinstance(choice, Mapping) and isinstance(choice.get("enum"), list)
        for choice in survivors
    ):
        merged = dict(survivors[0])
        merged["enum"] = sorted(
            (value for choice in survivors for value in choice["enum"]), key=_enum_sort_key
        )
        survivors = [merged]

    if len(survivors) == 1 and isinstance(survivors[0], Mapping):
        del collapsed["choices"]
        collapsed.update(filter_properties(survivors[0], manifest_version))
    else:
        collapsed["choices"] = survivors
    return collapsed


def filter_by_manifest_version(node: Any, manifest_version: int) -> Any:
    """Return a copy of the tree restricted to one manifest version, bounds removed."""
    if isinstance(node, list):
        return [
            filter_by_manifest_version(item, manifest_version)
            for item in filter_elements(node, manifest_version)
        ]
    if not isinstance(node, Mapping):
        return node
    filtered = collapse_choices(filter_properties(node, manifest_version), manifest_version)
    return {
        key: filter_by_manifest_version(value, manifest_version)
        for key, value in filtered.items()
        if key not in MANIFEST_BOUND_KEYS
    }


def _enum_sort_key(value: Any) -> str:
    return str(enum_value(value))
