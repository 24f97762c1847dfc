"""Element hook attaching compat annotations during the schema walk."""

from __future__ import annotations

import logging
from typing import Any

from webext_schema_generator.address_tracking import HierarchicalAddress
from webext_schema_generator.schema_management import SchemaInfo, SchemaOwner
from webext_schema_generator.schema_processing import ElementHook

from .compat_database import CompatDatabase
from .firefox_compat import firefox_annotations
from .thunderbird_compat import ThunderbirdCompat

logger = logging.getLogger(__name__)


class CompatAttacher:
    """Build per-schema element hooks for the owner specific compat strategy."""

    def __init__(
        self,
        *,
        database: CompatDatabase | None = None,
        thunderbird: ThunderbirdCompat | None = None,
    ) -> None:
        self._database = database
        self._thunderbird = thunderbird

    def hook_for(self, schema_info: SchemaInfo) -> ElementHook | None:
        if schema_info.owner == SchemaOwner.FIREFOX and self._database is not None:
            database = self._database

            def firefox_hook(node: dict[str, Any], address: HierarchicalAddress) -> None:
                logger.debug("compat %s", address.render())
                _extend_annotations(
                    node, firefox_annotations(database, schema_info, node, address)
                )

            return firefox_hook

        if schema_info.owner == SchemaOwner.THUNDERBIRD and self._thunderbird is not None:
            thunderbird = self._thunderbird
            file_name = schema_info.file.name

            def thunderbird_hook(node: dict[str, Any], address: HierarchicalAddress) -> None:
                logger.debug("compat %s", address.render())
                _extend_annotations(node, thunderbird.annotations(file_name, node, address))

            return thunderbird_hook
        return None


def _extend_annotations(node: dict[str, Any], added: list[dict[str, Any]]) -> None:
    # The walker hands over a fresh node, but its annotation list may still be shared.
    if added:
        node["annotations"] = [*(node.get("annotations") or []), *added]
