"""Combined filtering, compat and description walk over one schema tree."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from webext_schema_generator.address_tracking import (
    AddressSegment,
    HierarchicalAddress,
    array_element_segment,
    enum_value,
    is_known_element_group,
    needs_compat_data,
    restore_parity,
)
from webext_schema_generator.description_rewriting import REWRITTEN_FIELDS, rewrite_markup
from webext_schema_generator.version_filtering import (
    MANIFEST_BOUND_KEYS,
    collapse_choices,
    filter_elements,
    filter_properties,
)

logger = logging.getLogger(__name__)

ElementHook = Callable[[dict[str, Any], HierarchicalAddress], None]
VisitHook = Callable[[HierarchicalAddress], None]

_DROPPED_KEYS = frozenset({*MANIFEST_BOUND_KEYS, "$import"})


class SchemaWalker:
    """Depth-first walk producing the schema for a single manifest version.

    Every array element and object property outside the requested manifest version
    is dropped, choices are collapsed, enum values get an `enums` entry and each
    API element is handed to `element_hook` together with its hierarchical address.
    `visit_hook` sees the address of every node as it is entered, which is how
    historical schema files are indexed. Description rewriting only runs when a
    placeholder map is given.
    """

    def __init__(
        self,
        manifest_version: int,
        *,
        url_replacements: Mapping[str, str] | None = None,
        element_hook: ElementHook | None = None,
        visit_hook: VisitHook | None = None,
    ) -> None:
        self._manifest_version = manifest_version
        self._url_replacements = url_replacements
        self._element_hook = element_hook
        self._visit_hook = visit_hook

    def walk(self, value: Any, address: HierarchicalAddress | None = None) -> Any:
        current = address if address is not None else HierarchicalAddress()
        if isinstance(value, Mapping):
            current = restore_parity(current)
        if self._visit_hook is not None:
            self._visit_hook(current)

        if isinstance(value, list):
            survivors = filter_elements(value, self._manifest_version)
            return [
                self.walk(item, current.child(array_element_segment(current, position, item)))
                for position, item in enumerate(survivors)
            ]
        if not isinstance(value, Mapping):
            return value

        node = collapse_choices(
            filter_properties(value, self._manifest_version), self._manifest_version
        )
        if isinstance(node.get("enum"), list):
            node["enums"] = _sync_enum_entries(node["enum"], node.get("enums"))
        self._attach_element_data(node, current)

        result: dict[str, Any] = {}
        for key, child in node.items():
            if key in _DROPPED_KEYS:
                continue
            processed = self.walk(child, current.child(AddressSegment.prop(key)))
            if (
                key in REWRITTEN_FIELDS
                and isinstance(processed, str)
                and self._url_replacements is not None
            ):
                processed = rewrite_markup(processed, self._url_replacements)
            result[key] = processed

        if "enums" in result:
            _prune_enum_entries(result)
        return result

    def _attach_element_data(self, node: dict[str, Any], address: HierarchicalAddress) -> None:
        if self._element_hook is None or not needs_compat_data(address, node):
            return
        if not is_known_element_group(address):
            logger.debug("UNHANDLED, not adding compat data %s", address.render())
            return
        self._element_hook(node, address)


def collect_addresses(schema: Any, manifest_version: int) -> frozenset[tuple[Any, ...]]:
    """Return the reference tuples of every node address present in a schema."""
    seen: set[tuple[Any, ...]] = set()
    walker = SchemaWalker(manifest_version, visit_hook=lambda address: seen.add(address.refs()))
    walker.walk(schema)
    return frozenset(seen)


def _sync_enum_entries(values: list[Any], existing: Any) -> dict[str, Any]:
    """One `enums` entry per enum value, keeping annotated entries of known values."""
    annotated = existing if isinstance(existing, Mapping) else {}
    entries: dict[str, Any] = {}
    for value in map(enum_value, values):
        key = value if isinstance(value, str) else str(value)
        entries[key] = annotated.get(key) or {}
    return entries


def _prune_enum_entries(node: dict[str, Any]) -> None:
    enums = node["enums"]
    if not isinstance(enums, Mapping):
        return
    kept = {key: entry for key, entry in enums.items() if entry}
    if kept:
        node["enums"] = kept
    else:
        del node["enums"]
