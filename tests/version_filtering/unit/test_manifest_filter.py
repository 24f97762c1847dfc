"""Manifest-version filtering tests."""

from __future__ import annotations

from webext_schema_generator.version_filtering import (
    collapse_choices,
    filter_by_manifest_version,
    filter_elements,
    is_in_version_range,
)


def test_elements_outside_the_manifest_version_are_dropped_in_order() -> None:
    items = [
        {"value": "a"},
        {"value": "b", "min_manifest_version": 3},
        {"value": "c", "max_manifest_version": 2},
    ]

    assert filter_elements(items, 3) == [items[0], items[1]]
    assert filter_elements(items, 2) == [items[0], items[2]]


def test_scalars_are_always_in_range() -> None:
    assert is_in_version_range("value", 2)
    assert is_in_version_range({"min_manifest_version": 2, "max_manifest_version": 3}, 3)
    assert not is_in_version_range({"min_manifest_version": 3}, 2)


def test_enum_only_choices_are_merged_when_filtering_removed_a_choice() -> None:
    node = {
        "choices": [
            {"type": "string", "enum": ["zeta", "alpha"]},
            {"type": "string", "enum": ["mv2only"], "max_manifest_version": 2},
            {"type": "string", "enum": ["beta"], "min_manifest_version": 3},
        ]
    }

    collapsed = collapse_choices(node, 3)

    assert "choices" not in collapsed
    assert collapsed["type"] == "string"
    assert collapsed["enum"] == ["alpha", "beta", "zeta"]


def test_choices_are_untouched_when_nothing_was_filtered() -> None:
    node = {"choices": [{"type": "string", "enum": ["a"]}, {"type": "string", "enum": ["b"]}]}

    collapsed = collapse_choices(node, 3)

    assert collapsed["choices"] == node["choices"]


def test_single_surviving_choice_is_inlined() -> None:
    node = {
        "description": "A value.",
        "choices": [
            {"type": "integer", "max_manifest_version": 2},
            {"type": "string", "min_manifest_version": 3},
        ],
    }

    collapsed = collapse_choices(node, 3)

    assert collapsed == {"description": "A value.", "type": "string", "min_manifest_version": 3}


def test_multiple_non_enum_survivors_stay_choices() -> None:
    node = {
        "choices": [
            {"type": "integer"},
            {"type": "string"},
            {"type": "boolean", "max_manifest_version": 2},
        ]
    }

    collapsed = collapse_choices(node, 3)

    assert collapsed["choices"] == [{"type": "integer"}, {"type": "string"}]


def test_filter_by_manifest_version_strips_bounds_and_is_idempotent() -> None:
    tree = [
        {
            "namespace": "action",
            "min_manifest_version": 3,
            "functions": [
                {"name": "setIcon", "parameters": [{"name": "details", "max_manifest_version": 2}]},
                {"name": "openPopup"},
            ],
        },
        {"namespace": "browserAction", "max_manifest_version": 2},
    ]

    once = filter_by_manifest_version(tree, 3)
    twice = filter_by_manifest_version(once, 3)

    assert once == [
        {
            "namespace": "action",
            "functions": [{"name": "setIcon", "parameters": []}, {"name": "openPopup"}],
        }
    ]
    assert twice == once
