"""Annotation expansion tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from webext_schema_generator.annotation_merging import (
    AnnotationMergeError,
    expand_annotation_entry,
)

URLS = {"sample": "https://github.com/thunderbird/sample-extensions"}


def _expand(entry: dict, base_dir: Path) -> dict:
    return expand_annotation_entry(entry, base_dir=base_dir, url_replacements=URLS)


def test_free_text_fields_and_lists_are_rewritten(tmp_path: Path) -> None:
    entry = {
        "text": "Call ``compose.beginNew``.",
        "hint": "Firefox only.",
        "warning": "See $(url:sample)[the samples].",
        "list": ["`one`", "two", 3],
        "version_added": "115",
    }

    expanded = _expand(entry, tmp_path)

    assert expanded == {
        "text": "Call <val>compose.beginNew</val>.",
        "hint": "Thunderbird only.",
        "warning": (
            "See <a href='https://github.com/thunderbird/sample-extensions'>the samples</a>."
        ),
        "list": ["<val>one</val>", "two", 3],
        "version_added": "115",
    }


@pytest.mark.parametrize(
    ("file_name", "expected_type"),
    [("style.css", "CSS"), ("manifest.json", "JSON"), ("background.mjs", "JavaScript")],
)
def test_code_type_is_inferred_from_the_extension(
    tmp_path: Path, file_name: str, expected_type: str
) -> None:
    (tmp_path / file_name).write_text("first\nsecond", encoding="utf-8")

    expanded = _expand({"code": file_name}, tmp_path)

    assert expanded == {"code": ["first", "second"], "type": expected_type}


def test_explicit_type_and_expanded_code_are_kept(tmp_path: Path) -> None:
    (tmp_path / "snippet.js").write_text("let x;", encoding="utf-8")

    typed = _expand({"code": "snippet.js", "type": "TypeScript"}, tmp_path)
    already_expanded = _expand({"code": ["let y;"], "type": "JavaScript"}, tmp_path)

    assert typed == {"code": ["let x;"], "type": "TypeScript"}
    assert already_expanded == {"code": ["let y;"], "type": "JavaScript"}


def test_missing_code_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(AnnotationMergeError, match="missing.js"):
        _expand({"code": "missing.js"}, tmp_path)
