"""Hierarchical address entities."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

AddressRef = str | int | float | bool


class SegmentKind(str, Enum):
    """How a segment identifies its node inside the parent container."""

    INDEX = "index"
    VALUE = "value"
    PROPERTY = "property"
    NAME = "name"
    ID = "id"
    NAMESPACE = "namespace"
    EXTEND = "$extend"


@dataclass(frozen=True)
class AddressSegment:
    """One typed step of a hierarchical address."""

    ref: AddressRef
    kind: SegmentKind
    name: str | None = field(default=None, compare=False)

    @staticmethod
    def index(position: int, name: str | None = None) -> AddressSegment:
        return AddressSegment(ref=position, kind=SegmentKind.INDEX, name=name)

    @staticmethod
    def prop(key: str) -> AddressSegment:
        return AddressSegment(ref=key, kind=SegmentKind.PROPERTY)

    @property
    def lookup_key(self) -> AddressRef:
        """Key used for compat lookups; indexed elements prefer their name."""
        if self.kind == SegmentKind.INDEX and self.name:
            return self.name
        return self.ref


@dataclass(frozen=True)
class HierarchicalAddress:
    """Ordered sequence of segments locating a node inside a schema tree."""

    segments: tuple[AddressSegment, ...] = ()

    @staticmethod
    def of(*segments: AddressSegment) -> HierarchicalAddress:
        return HierarchicalAddress(tuple(segments))

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __getitem__(self, position: int) -> AddressSegment:
        return self.segments[position]

    def child(self, segment: AddressSegment) -> HierarchicalAddress:
        return HierarchicalAddress(self.segments + (segment,))

    def refs(self) -> tuple[AddressRef, ...]:
        """Reference values only, the form used for structural comparison."""
        return tuple(_normalize_ref(segment.ref) for segment in self.segments)

    def ref_at(self, position: int) -> AddressRef | None:
        try:
            return self.segments[position].ref
        except IndexError:
            return None

    @property
    def is_element(self) -> bool:
        """Odd-length addresses denote actual API elements, even ones container groups."""
        return len(self.segments) % 2 == 1

    def is_prefix_of(self, other: HierarchicalAddress) -> bool:
        own = self.refs()
        return other.refs()[: len(own)] == own

    def render(self) -> str:
        return "~".join(str(ref) for ref in self.refs())

    @staticmethod
    def from_refs(refs: Iterable[AddressRef]) -> HierarchicalAddress:
        """Build an address from bare references, used by tests and log replay."""
        segments = []
        for ref in refs:
            if isinstance(ref, int) and not isinstance(ref, bool):
                segments.append(AddressSegment.index(ref))
            else:
                segments.append(AddressSegment.prop(str(ref)))
        return HierarchicalAddress(tuple(segments))


def _normalize_ref(ref: AddressRef) -> AddressRef:
    if isinstance(ref, bool):
        return str(ref).lower()
    if isinstance(ref, int | float):
        return str(ref)
    return ref
