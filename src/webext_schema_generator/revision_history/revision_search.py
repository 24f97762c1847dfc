"""Search of the oldest revision in which a schema element exists."""

from __future__ import annotations

import logging
from collections.abc import Set
from typing import Any

from webext_schema_generator.address_tracking import HierarchicalAddress
from webext_schema_generator.import_resolution import resolve_imports
from webext_schema_generator.schema_management import parse_schema_text
from webext_schema_generator.schema_processing import collect_addresses

from .hg_locations import COMM_SCHEMA_FOLDER, COMM_VERSION_FILE, RevisionSource

logger = logging.getLogger(__name__)

_ITEMS_CHOICE_SUFFIX = ("items", "0", "choices", "0")
_CHOICE_SUFFIX = ("choices", "0")

AddressIndex = Set[tuple[Any, ...]]


def contains_address(index: AddressIndex, address: HierarchicalAddress) -> bool:
    """Whether an address exists in an indexed schema.

    The first choice of a parameter that was later turned into a choice is the
    original parameter, so it also matches the parameter itself.
    """
    refs = address.refs()
    if refs[-4:] == _ITEMS_CHOICE_SUFFIX:
        if refs[:-4] in index:
            return True
    elif refs[-2:] == _CHOICE_SUFFIX and refs[:-2] in index:
        return True
    return refs in index


class HistoricalRevisionResolver:
    """Determine the first application version supporting a Thunderbird schema element.

    Only the revisions returned by the bounded revision log are inspected, support
    predating that window reports the oldest revision of the window or nothing.
    """

    def __init__(
        self,
        source: RevisionSource,
        *,
        manifest_version: int,
        until_revision: str = "tip",
        schema_folder: str = COMM_SCHEMA_FOLDER,
        version_file: str = COMM_VERSION_FILE,
    ) -> None:
        self._source = source
        self._manifest_version = manifest_version
        self._until_revision = until_revision
        self._schema_folder = schema_folder
        self._version_file = version_file
        self._indexed_file: str | None = None
        self._indexes: dict[str, AddressIndex] = {}
        self._logs: dict[str, list[str]] = {}

    def find_first_supporting_revision(
        self, file_name: str, address: HierarchicalAddress
    ) -> str | bool:
        """Return the major version of the oldest revision containing the address, or False."""
        file_path = f"{self._schema_folder}/{file_name}"
        for revision in reversed(self._revision_log(file_path)):
            if contains_address(self._address_index(file_name, file_path, revision), address):
                return self._major_version(revision)
        logger.warning("No revision of %s contains %s", file_name, address.render())
        return False

    def _revision_log(self, file_path: str) -> list[str]:
        if file_path not in self._logs:
            self._logs[file_path] = self._source.revision_log(file_path, self._until_revision)
        return self._logs[file_path]

    def _address_index(self, file_name: str, file_path: str, revision: str) -> AddressIndex:
        # Indexes of one file are kept while its elements are being resolved.
        if file_name != self._indexed_file:
            self._indexes.clear()
            self._indexed_file = file_name
        if revision not in self._indexes:
            logger.debug("indexing %s at revision %s", file_name, revision)
            schema = parse_schema_text(
                self._source.read_file(file_path, revision), source=f"{file_name}@{revision}"
            )
            self._indexes[revision] = collect_addresses(
                resolve_imports(schema), self._manifest_version
            )
        return self._indexes[revision]

    def _major_version(self, revision: str) -> str:
        return self._source.read_file(self._version_file, revision).strip().split(".")[0]
