"""Shared fixtures: a minimal mozilla checkout on disk."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

LICENSE = "/* This Source Code Form is subject to the terms of the Mozilla Public License. */\n"

FIREFOX_RUNTIME = [
    {
        "namespace": "runtime",
        "functions": [{"name": "getManifest", "type": "function", "parameters": []}],
        "types": [
            {
                "id": "QueryInfo",
                "type": "object",
                "properties": {"active": {"type": "boolean", "optional": True}},
            }
        ],
    }
]

FIREFOX_TABS = [{"namespace": "tabs", "functions": [{"name": "captureTab"}]}]

FIREFOX_PKCS11 = [{"namespace": "pkcs11", "functions": [{"name": "getModuleSlots"}]}]

THUNDERBIRD_TABS = [
    {
        "namespace": "tabs",
        "description": "Use $(url:tab-guide)[tabs] in Firefox.",
        "functions": [
            {
                "name": "query",
                "type": "function",
                "parameters": [
                    {"name": "queryInfo", "$import": "QueryInfo"},
                    {"name": "callback", "type": "function"},
                ],
            },
            {
                "name": "remove",
                "type": "function",
                "parameters": [{"name": "tabIds", "type": "integer"}],
            },
            {"name": "legacyOnly", "type": "function", "max_manifest_version": 2},
        ],
    }
]

THUNDERBIRD_TABS_ANNOTATIONS = [
    {
        "namespace": "tabs",
        "annotations": [{"version_added": "78"}],
        "functions": [{"name": "query", "annotations": [{"note": "Firefox tabs are mail tabs."}]}],
    }
]

PERMISSIONS_FTL = (
    "webext-perms-description-tabs = Access browser tabs\n"
    "webext-perms-description-nativeMessaging2 = Talk to programs other than "
    "{ -brand-short-name }\n"
)


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def mozilla_checkout(tmp_path: Path) -> Path:
    """A `mozilla-central` checkout with Firefox, Thunderbird and annotation files."""
    checkout = tmp_path / "mozilla-central"
    toolkit = checkout / "toolkit/components/extensions/schemas"
    browser = checkout / "browser/components/extensions/schemas"
    comm = checkout / "comm/mail/components/extensions"
    _write(toolkit / "runtime.json", LICENSE + json.dumps(FIREFOX_RUNTIME))
    _write(toolkit / "tabs.json", LICENSE + json.dumps(FIREFOX_TABS))
    _write(browser / "pkcs11.json", LICENSE + json.dumps(FIREFOX_PKCS11))
    _write(comm / "schemas/tabs.json", LICENSE + json.dumps(THUNDERBIRD_TABS))
    _write(comm / "annotations/tabs.json", json.dumps(THUNDERBIRD_TABS_ANNOTATIONS))
    _write(
        comm / "annotations/url-placeholders.json",
        json.dumps({"tab-guide": "https://developer.thunderbird.net/tabs"}),
    )
    _write(checkout / "comm/mail/config/version_display.txt", "128.0a1\n")
    _write(
        checkout / "toolkit/locales/en-US/toolkit/global/extensionPermissions.ftl",
        PERMISSIONS_FTL,
    )
    return checkout


@pytest.fixture
def compat_data_path(tmp_path: Path) -> Path:
    document = {
        "webextensions": {
            "api": {
                "runtime": {
                    "__compat": {"support": {"thunderbird": {"version_added": "68"}}},
                    "getManifest": {
                        "__compat": {
                            "mdn_url": "https://developer.mozilla.org/runtime/getManifest",
                            "support": {"firefox": {"version_added": "45"}},
                        }
                    },
                },
                "pkcs11": {"__compat": {"support": {"thunderbird": {"version_added": False}}}},
            },
            "manifest": {},
        }
    }
    path = tmp_path / "bcd.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path
