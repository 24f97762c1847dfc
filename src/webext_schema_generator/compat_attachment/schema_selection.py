"""Selection of the Firefox schemas relevant for Thunderbird."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from webext_schema_generator.schema_management import SchemaInfo, SchemaOwner

from .compat_database import CompatDatabase

logger = logging.getLogger(__name__)

GLOBAL_MANIFEST_TYPES = frozenset({"ManifestBase", "WebExtensionManifest"})


def thunderbird_namespaces(schemas: Iterable[SchemaInfo]) -> frozenset[str]:
    """Namespaces implemented by Thunderbird itself, the manifest namespace excluded."""
    return frozenset(
        namespace
        for info in schemas
        if info.owner == SchemaOwner.THUNDERBIRD
        for namespace in info.namespaces
        if namespace != "manifest"
    )


def select_schemas(
    schemas: list[SchemaInfo], database: CompatDatabase | None
) -> list[SchemaInfo]:
    """Drop Firefox schemas that Thunderbird re-implements or does not support."""
    reimplemented = thunderbird_namespaces(schemas)
    selected: list[SchemaInfo] = []
    for info in schemas:
        if info.owner == SchemaOwner.THUNDERBIRD:
            selected.append(info)
        elif any(namespace in reimplemented for namespace in info.namespaces):
            logger.info("Skipping re-implemented schema %s", info.file.name)
        elif database is None or _is_supported(info, database):
            selected.append(info)
        else:
            logger.info("Skipping unsupported schema %s", info.file.name)
    return selected


def _is_supported(info: SchemaInfo, database: CompatDatabase) -> bool:
    if any(database.supports_api(namespace) for namespace in info.namespaces):
        return True
    manifest_types = _manifest_types(info.schema)
    for entry in manifest_types:
        if entry.get("$extend") == "WebExtensionManifest" and any(
            database.supports_manifest_key(key) for key in entry.get("properties") or {}
        ):
            return True
    return any(entry.get("id") in GLOBAL_MANIFEST_TYPES for entry in manifest_types)


def _manifest_types(schema: list[Any]) -> list[Mapping[str, Any]]:
    return [
        entry
        for namespace in schema
        if isinstance(namespace, Mapping) and namespace.get("namespace") == "manifest"
        for entry in namespace.get("types") or []
        if isinstance(entry, Mapping)
    ]
