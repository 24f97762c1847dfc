"""Revision history exports."""

from .hg_locations import (
    COMM_SCHEMA_FOLDER,
    COMM_VERSION_FILE,
    DEFAULT_REVISION_COUNT,
    HG_URL,
    HgRepository,
    RevisionSource,
    raw_file_url,
    revision_log_url,
)
from .revision_search import HistoricalRevisionResolver, contains_address

__all__ = [
    "COMM_SCHEMA_FOLDER",
    "COMM_VERSION_FILE",
    "DEFAULT_REVISION_COUNT",
    "HG_URL",
    "HgRepository",
    "HistoricalRevisionResolver",
    "RevisionSource",
    "contains_address",
    "raw_file_url",
    "revision_log_url",
]
