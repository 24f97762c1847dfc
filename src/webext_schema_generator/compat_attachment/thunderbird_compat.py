"""Compat annotations for schema elements owned by Thunderbird."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Protocol

from webext_schema_generator.address_tracking import HierarchicalAddress
from webext_schema_generator.remote_sources import UrlChecker

from .firefox_compat import has_annotation

API_DOC_BASE_URL = "https://webextension-api.thunderbird.net/en"


class VersionSearch(Protocol):
    """Protocol for the historical search of the first supporting version."""

    def find_first_supporting_revision(
        self, file_name: str, address: HierarchicalAddress
    ) -> str | bool: ...


def api_doc_slug(
    manifest_version: int, doc_release: str | None, base_url: str = API_DOC_BASE_URL
) -> str:
    if doc_release == "beta":
        return f"{base_url}/beta-mv{manifest_version}"
    if doc_release == "esr":
        return f"{base_url}/esr-mv{manifest_version}"
    return f"{base_url}/mv{manifest_version}"


def documentation_anchor(entry_name: str, node: Mapping[str, Any]) -> str:
    """Anchor of an API entry: its name plus its parameter names, callback excluded."""
    parts = [str(entry_name)]
    parameters = node.get("parameters")
    if isinstance(parameters, list):
        parts.extend(
            str(parameter.get("name"))
            for parameter in parameters
            if isinstance(parameter, Mapping) and parameter.get("name") != "callback"
        )
    return "-".join(parts).lower()


class ThunderbirdCompat:
    """Documentation links and first supported version of Thunderbird API elements."""

    def __init__(
        self,
        *,
        doc_slug: str,
        url_checker: UrlChecker | None = None,
        version_search: VersionSearch | None = None,
    ) -> None:
        self._doc_slug = doc_slug
        self._url_checker = url_checker
        self._version_search = version_search

    def annotations(
        self, file_name: str, node: Mapping[str, Any], address: HierarchicalAddress
    ) -> list[dict[str, Any]]:
        added: list[dict[str, Any]] = []
        if len(address) == 3:
            url = self.documentation_url(address, node)
            if self._is_reachable(url, address):
                added.append({"api_documentation_url": url})

        existing = node.get("annotations") or []
        if self._version_search is not None and not has_annotation(existing, "version_added"):
            added.append(
                {
                    "version_added": self._version_search.find_first_supporting_revision(
                        file_name, address
                    )
                }
            )
        return added

    def documentation_url(self, address: HierarchicalAddress, node: Mapping[str, Any]) -> str:
        namespace, entry_name = address[0].ref, address[2].lookup_key
        return f"{self._doc_slug}/{namespace}.html#{documentation_anchor(str(entry_name), node)}"

    def _is_reachable(self, url: str, address: HierarchicalAddress) -> bool:
        if self._url_checker is None:
            return True
        refs = json.dumps(list(address.refs()))
        context = f"missing documentation required for compat data: {refs}"
        return self._url_checker.is_reachable(url, context)
