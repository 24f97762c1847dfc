"""Thunderbird compat annotation tests."""

from __future__ import annotations

from pathlib import Path

from webext_schema_generator.address_tracking import HierarchicalAddress
from webext_schema_generator.compat_attachment import (
    API_DOC_BASE_URL,
    CompatAttacher,
    ThunderbirdCompat,
    api_doc_slug,
    documentation_anchor,
)
from webext_schema_generator.schema_management import SchemaFile, SchemaInfo, SchemaOwner


class _FakeChecker:
    def __init__(self, reachable: bool) -> None:
        self.reachable = reachable
        self.checked: list[str] = []

    def is_reachable(self, url: str, context: str = "") -> bool:
        self.checked.append(url)
        return self.reachable


class _FakeSearch:
    def __init__(self, result) -> None:
        self.result = result
        self.calls: list[tuple[str, str]] = []

    def find_first_supporting_revision(self, file_name: str, address: HierarchicalAddress):
        self.calls.append((file_name, address.render()))
        return self.result


def _node() -> dict:
    return {
        "name": "getDetails",
        "parameters": [{"name": "tabId"}, {"name": "callback"}],
    }


def _address(*refs) -> HierarchicalAddress:
    return HierarchicalAddress.from_refs(refs)


def test_documentation_anchor_excludes_callback() -> None:
    node = {"parameters": [{"name": "x"}, {"name": "callback"}]}

    assert documentation_anchor("myFunction", node) == "myfunction-x"
    assert documentation_anchor("onCreated", {}) == "oncreated"


def test_documentation_slug_per_release() -> None:
    assert api_doc_slug(3, "beta") == f"{API_DOC_BASE_URL}/beta-mv3"
    assert api_doc_slug(2, "esr") == f"{API_DOC_BASE_URL}/esr-mv2"
    assert api_doc_slug(3, None) == f"{API_DOC_BASE_URL}/mv3"
    assert api_doc_slug(3, "release", "https://docs.example") == "https://docs.example/mv3"


def test_top_level_entries_get_a_validated_documentation_url_and_version() -> None:
    checker = _FakeChecker(reachable=True)
    search = _FakeSearch("102")
    compat = ThunderbirdCompat(
        doc_slug=f"{API_DOC_BASE_URL}/mv3", url_checker=checker, version_search=search
    )

    added = compat.annotations(
        "compose.json", _node(), _address("compose", "functions", "getDetails")
    )

    assert added == [
        {"api_documentation_url": f"{API_DOC_BASE_URL}/mv3/compose.html#getdetails-tabid"},
        {"version_added": "102"},
    ]
    assert search.calls == [("compose.json", "compose~functions~getDetails")]


def test_unreachable_documentation_url_is_omitted() -> None:
    compat = ThunderbirdCompat(
        doc_slug="https://docs.example/mv3",
        url_checker=_FakeChecker(reachable=False),
        version_search=_FakeSearch(False),
    )

    added = compat.annotations(
        "compose.json", _node(), _address("compose", "functions", "getDetails")
    )

    assert added == [{"version_added": False}]


def test_nested_elements_only_get_a_version() -> None:
    checker = _FakeChecker(reachable=True)
    compat = ThunderbirdCompat(
        doc_slug="https://docs.example/mv3", url_checker=checker, version_search=_FakeSearch("91")
    )

    added = compat.annotations(
        "compose.json",
        {"name": "tabId"},
        _address("compose", "functions", "getDetails", "parameters", 0),
    )

    assert added == [{"version_added": "91"}]
    assert checker.checked == []


def test_annotated_version_skips_the_history_search() -> None:
    search = _FakeSearch("91")
    compat = ThunderbirdCompat(doc_slug="https://docs.example/mv3", version_search=search)
    node = {"name": "tabId", "annotations": [{"version_added": "78"}]}

    added = compat.annotations(
        "compose.json", node, _address("compose", "functions", "getDetails", "parameters", 0)
    )

    assert added == []
    assert search.calls == []


def test_attacher_builds_thunderbird_hook_with_the_schema_file_name() -> None:
    search = _FakeSearch("128")
    attacher = CompatAttacher(
        thunderbird=ThunderbirdCompat(doc_slug="https://docs.example/mv3", version_search=search)
    )
    info = SchemaInfo(
        file=SchemaFile(name="compose.json", directory=Path("schemas")),
        owner=SchemaOwner.THUNDERBIRD,
        schema=[],
    )
    node = {"name": "tabId"}

    hook = attacher.hook_for(info)
    assert hook is not None
    hook(node, _address("compose", "functions", "getDetails", "parameters", 0))

    assert node["annotations"] == [{"version_added": "128"}]
    assert search.calls[0][0] == "compose.json"
