"""Read-only view on the browser-compat-data WebExtension records."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from webext_schema_generator.address_tracking import HierarchicalAddress
from webext_schema_generator.schema_management import SchemaError, read_json_document

COMPAT_KEY = "__compat"


class CompatDatabase:
    """Lookup of `__compat` records by hierarchical schema address."""

    def __init__(self, document: Mapping[str, Any]) -> None:
        try:
            webextensions = document["webextensions"]
            self._api: Mapping[str, Any] = webextensions["api"]
            self._manifest: Mapping[str, Any] = webextensions.get("manifest", {})
        except (KeyError, TypeError, AttributeError) as exc:
            raise SchemaError("Compat data does not contain webextensions.api records") from exc

    @classmethod
    def from_path(cls, path: Path) -> CompatDatabase:
        document = read_json_document(path)
        if not isinstance(document, Mapping):
            raise SchemaError(f"Compat data {path} must be a JSON object")
        return cls(document)

    def lookup(self, address: HierarchicalAddress) -> Mapping[str, Any] | None:
        """Return the `__compat` record of an API element, if there is one.

        The first segment is the namespace (dotted namespaces are nested records),
        after that only every second segment names a record: the ones in between
        are the structural groups such as `functions` or `parameters`.
        """
        if len(address) == 0:
            return None
        entry: Any = self._api
        for part in str(address[0].ref).split("."):
            entry = _child(entry, part)
            if entry is None:
                return None
        for position in range(2, len(address), 2):
            entry = _child(entry, address[position].lookup_key)
            if entry is None:
                return None
        record = entry.get(COMPAT_KEY)
        return record if isinstance(record, Mapping) else None

    def supports_api(self, namespace: str) -> bool:
        return namespace in self._api and _thunderbird_supported(self._api[namespace])

    def supports_manifest_key(self, key: str) -> bool:
        return key in self._manifest and _thunderbird_supported(self._manifest[key])


def _child(entry: Any, key: Any) -> Any:
    if not isinstance(entry, Mapping):
        return None
    child = entry.get(str(key))
    return child if child else None


def _thunderbird_supported(entry: Any) -> bool:
    # An explicit `version_added: false` marks an unsupported record, no data means supported.
    if not isinstance(entry, Mapping):
        return True
    support = entry.get(COMPAT_KEY, {}).get("support", {}).get("thunderbird")
    if isinstance(support, list):
        support = support[0] if support else None
    if not isinstance(support, Mapping):
        return True
    return support.get("version_added") is not False
