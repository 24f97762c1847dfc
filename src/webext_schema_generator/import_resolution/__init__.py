"""Import resolution exports."""

from .import_resolver import find_id_or_namespace, merge_missing, resolve_imports

__all__ = ["find_id_or_namespace", "merge_missing", "resolve_imports"]
