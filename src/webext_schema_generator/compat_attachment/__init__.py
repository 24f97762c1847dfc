"""Compat attachment exports."""

from .compat_attacher import CompatAttacher
from .compat_database import CompatDatabase
from .firefox_compat import firefox_annotations, has_annotation, leading_int, prefer_version
from .schema_selection import select_schemas, thunderbird_namespaces
from .thunderbird_compat import (
    API_DOC_BASE_URL,
    ThunderbirdCompat,
    VersionSearch,
    api_doc_slug,
    documentation_anchor,
)

__all__ = [
    "API_DOC_BASE_URL",
    "CompatAttacher",
    "CompatDatabase",
    "ThunderbirdCompat",
    "VersionSearch",
    "api_doc_slug",
    "documentation_anchor",
    "firefox_annotations",
    "has_annotation",
    "leading_int",
    "prefer_version",
    "select_schemas",
    "thunderbird_namespaces",
]
