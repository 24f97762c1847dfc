"""Compat annotations for schema elements owned by Firefox."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from webext_schema_generator.address_tracking import HierarchicalAddress
from webext_schema_generator.description_rewriting import rebrand
from webext_schema_generator.schema_management import SchemaInfo

from .compat_database import CompatDatabase

VERSION_KEYS = ("version_added", "version_removed")


def has_annotation(annotations: list[Any], key: str) -> bool:
    return any(isinstance(entry, Mapping) and key in entry for entry in annotations)


def leading_int(value: Any) -> int | None:
    """Numeric prefix of a version value, booleans and free text have none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    digits = ""
    for char in str(value).strip():
        if not char.isdigit():
            break
        digits += char
    return int(digits) if digits else None


def prefer_version(firefox_version: Any, thunderbird_version: Any) -> Any:
    """Pick the version to report when a Thunderbird floor exists next to BCD data."""
    floor = leading_int(thunderbird_version)
    if floor is None:
        return firefox_version
    reported = leading_int(firefox_version)
    if firefox_version is True or reported is None or floor > reported:
        return thunderbird_version
    return firefox_version


def firefox_support(record: Mapping[str, Any]) -> Mapping[str, Any] | None:
    support = record.get("support", {}).get("firefox")
    if isinstance(support, list):
        support = support[0] if support else None
    return support if isinstance(support, Mapping) else None


def firefox_annotations(
    database: CompatDatabase,
    schema_info: SchemaInfo,
    node: Mapping[str, Any],
    address: HierarchicalAddress,
) -> list[dict[str, Any]]:
    """Annotations derived from the compat record matching the address."""
    record = database.lookup(address)
    if record is None:
        return []
    existing = list(node.get("annotations") or [])
    added: list[dict[str, Any]] = []
    if record.get("mdn_url"):
        added.append({"mdn_documentation_url": record["mdn_url"]})

    support = firefox_support(record)
    if support is None:
        return added
    floors = {
        "version_added": schema_info.version_added,
        "version_removed": schema_info.version_removed,
    }
    for key, value in support.items():
        if key in VERSION_KEYS:
            if has_annotation(existing, key):
                continue
            added.append({key: prefer_version(value, floors[key])})
        elif key == "notes":
            notes = value if isinstance(value, list) else [value]
            added.extend({"note": rebrand(str(note)), "bcd": True} for note in notes)
    return added
