"""Address tracking exports."""

from .address_models import AddressSegment, HierarchicalAddress, SegmentKind
from .address_rules import (
    array_element_segment,
    enum_value,
    is_known_element_group,
    needs_compat_data,
    restore_parity,
)

__all__ = [
    "AddressSegment",
    "HierarchicalAddress",
    "SegmentKind",
    "array_element_segment",
    "enum_value",
    "is_known_element_group",
    "needs_compat_data",
    "restore_parity",
]
