"""Schema processing exports."""

from .schema_walker import ElementHook, SchemaWalker, VisitHook, collect_addresses

__all__ = ["ElementHook", "SchemaWalker", "VisitHook", "collect_addresses"]
