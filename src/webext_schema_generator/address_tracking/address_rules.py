"""Address construction rules shared by every schema traversal."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .address_models import AddressSegment, HierarchicalAddress, SegmentKind

# Elements of these arrays keep positional semantics for later merging.
POSITIONAL_ARRAY_KEYS = frozenset({"choices", "parameters"})

# Identity fields tried in order for all other array elements.
IDENTITY_FIELDS: tuple[tuple[str, SegmentKind], ...] = (
    ("name", SegmentKind.NAME),
    ("id", SegmentKind.ID),
    ("namespace", SegmentKind.NAMESPACE),
    ("$extend", SegmentKind.EXTEND),
)

# Keys whose single child breaks the even/odd parity of the address.
PARITY_BREAKING_KEYS = frozenset({"returns", "items", "additionalProperties"})

ELEMENT_GROUP_KEYS = frozenset(
    {
        "types",
        "functions",
        "events",
        "properties",
        "extraParameters",
        "parameters",
        "choices",
        "enums",
    }
)

SKIPPED_GROUP_KEYS = frozenset(
    {
        "annotations",
        "items",
        "returns",
        "patternProperties",
        "additionalProperties",
        "filters",
    }
)


def array_element_segment(
    parent: HierarchicalAddress, position: int, element: Any
) -> AddressSegment:
    """Return the segment addressing one element of an array container."""
    parent_key = parent.ref_at(-1)
    name = element.get("name") if isinstance(element, Mapping) else None
    if not isinstance(name, str):
        name = None
    if parent_key in POSITIONAL_ARRAY_KEYS:
        return AddressSegment.index(position, name=name)
    if parent_key == "enum":
        return AddressSegment(ref=enum_value(element), kind=SegmentKind.VALUE)
    if isinstance(element, Mapping):
        for field_name, kind in IDENTITY_FIELDS:
            value = element.get(field_name)
            if value:
                return AddressSegment(ref=value, kind=kind)
    return AddressSegment.index(position, name=name)


def enum_value(element: Any) -> Any:
    """Value of an enum entry, entries written as objects are identified by their name."""
    if isinstance(element, Mapping):
        return element.get("name")
    return element


def restore_parity(address: HierarchicalAddress) -> HierarchicalAddress:
    """Insert the synthetic index below returns/items/additionalProperties.

    Without it an element reached through one of these keys would sit at an even
    position and be mistaken for a container group.
    """
    if not address.is_element and address.ref_at(-1) in PARITY_BREAKING_KEYS:
        return address.child(AddressSegment.index(0))
    return address


def is_permission_container(address: HierarchicalAddress) -> bool:
    """manifest.types.<$extend>.choices.N, permissions are handled through their enums."""
    return (
        len(address) == 5
        and address[0].ref == "manifest"
        and address[1].ref == "types"
        and address[2].kind == SegmentKind.EXTEND
        and address[3].ref == "choices"
    )


def needs_compat_data(address: HierarchicalAddress, node: Mapping[str, Any]) -> bool:
    """Whether the node at this address is an API element eligible for compat data."""
    if len(address) == 0 or not address.is_element:
        return False
    if address.ref_at(-2) in SKIPPED_GROUP_KEYS:
        return False
    if node.get("$extend"):
        return False
    return not is_permission_container(address)


def is_known_element_group(address: HierarchicalAddress) -> bool:
    return len(address) == 1 or address.ref_at(-2) in ELEMENT_GROUP_KEYS
