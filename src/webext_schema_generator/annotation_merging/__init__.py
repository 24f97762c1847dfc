"""Annotation merging exports."""

from .annotation_expansion import CODE_TYPES, expand_annotation_entries, expand_annotation_entry
from .annotation_files import apply_annotation_folder, schema_version_floor
from .annotation_merger import IDENTITY_KEYS, AnnotationMerger
from .merge_errors import AnnotationMergeError

__all__ = [
    "CODE_TYPES",
    "IDENTITY_KEYS",
    "AnnotationMergeError",
    "AnnotationMerger",
    "apply_annotation_folder",
    "expand_annotation_entries",
    "expand_annotation_entry",
    "schema_version_floor",
]
