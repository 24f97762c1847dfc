"""Shared compat data fixtures."""

from __future__ import annotations

import pytest
from webext_schema_generator.compat_attachment import CompatDatabase

MDN = "https://developer.mozilla.org/en-US/docs/Mozilla/Add-ons/WebExtensions/API"


def _compat(firefox=None, thunderbird=None, mdn_url=None) -> dict:
    support = {}
    if firefox is not None:
        support["firefox"] = firefox
    if thunderbird is not None:
        support["thunderbird"] = thunderbird
    record: dict = {"support": support}
    if mdn_url:
        record["mdn_url"] = mdn_url
    return {"__compat": record}


@pytest.fixture
def compat_document() -> dict:
    return {
        "webextensions": {
            "api": {
                "tabs": {
                    **_compat(firefox={"version_added": "45"}),
                    "query": {
                        **_compat(
                            firefox={
                                "version_added": "45",
                                "notes": "Firefox ignores the windowType option.",
                            },
                            mdn_url=f"{MDN}/tabs/query",
                        ),
                        "queryInfo": _compat(firefox={"version_added": "50"}),
                    },
                },
                "privacy": {
                    "network": {
                        "networkPredictionEnabled": _compat(
                            firefox=[{"version_added": "54"}, {"version_added": "48"}],
                        ),
                    },
                },
                "pkcs11": _compat(thunderbird={"version_added": False}),
                "runtime": _compat(thunderbird={"version_added": "68"}),
            },
            "manifest": {
                "theme": _compat(thunderbird={"version_added": "60"}),
                "chrome_settings_overrides": _compat(thunderbird={"version_added": False}),
            },
        }
    }


@pytest.fixture
def compat_database(compat_document: dict) -> CompatDatabase:
    return CompatDatabase(compat_document)
