"""Annotation merge errors."""


class AnnotationMergeError(Exception):
    """Raised when an annotation file no longer fits the schema it annotates."""
