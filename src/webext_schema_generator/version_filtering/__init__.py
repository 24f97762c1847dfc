"""Version filtering exports."""

from .manifest_filter import (
    MANIFEST_BOUND_KEYS,
    collapse_choices,
    filter_by_manifest_version,
    filter_elements,
    filter_properties,
    is_in_version_range,
)

__all__ = [
    "MANIFEST_BOUND_KEYS",
    "collapse_choices",
    "filter_by_manifest_version",
    "filter_elements",
    "filter_properties",
    "is_in_version_range",
]
