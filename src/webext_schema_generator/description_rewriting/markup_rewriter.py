"""Rewriting of legacy markup and URL placeholders in free-text fields."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

logger = logging.getLogger(__name__)

REWRITTEN_FIELDS = frozenset({"description", "deprecated"})

_LEGACY_MARKUP = (
    (re.compile(r":doc:`(.*?)`"), r"$(doc:\1)"),
    (re.compile(r":ref:`(.*?)`"), r"$(ref:\1)"),
    (re.compile(r":permission:`(.*?)`"), r"<permission>\1</permission>"),
)
_URL_PLACEHOLDER = re.compile(r"\$\(\s*url\s*:\s*([^)]+?)\s*\)\[(.+?)\]")
_RELATIVE_HREF = re.compile(r"""(<a\s[^>]*?href=)(["'])(?![a-zA-Z][a-zA-Z0-9+.-]*:|#|/)(.+?)\2""")
_DOUBLE_BACKTICK = re.compile(r"``(.+?)``")
_SINGLE_BACKTICK = re.compile(r"`(.+?)`")


def replace_url_placeholders(text: str, url_replacements: Mapping[str, str]) -> str:
    """Turn `$(url:key)[label]` into an anchor, unknown keys stay untouched."""

    def _substitute(match: re.Match[str]) -> str:
        placeholder = match.group(1).strip()
        url = url_replacements.get(placeholder)
        if not url:
            logger.warning("Unknown url placeholder: %s", placeholder)
            return match.group(0)
        return f"<a href='{url}'>{match.group(2)}</a>"

    return _URL_PLACEHOLDER.sub(_substitute, text)


def replace_relative_hrefs(text: str, url_replacements: Mapping[str, str]) -> str:
    """Resolve `<a href="key">` targets that are not absolute through the placeholder map."""

    def _substitute(match: re.Match[str]) -> str:
        placeholder = match.group(3)
        url = url_replacements.get(placeholder)
        if not url:
            logger.warning("Unknown url placeholder: %s", placeholder)
            return match.group(0)
        return f"{match.group(1)}{match.group(2)}{url}{match.group(2)}"

    return _RELATIVE_HREF.sub(_substitute, text)


def rebrand(text: str) -> str:
    return text.replace("Firefox", "Thunderbird")


def rewrite_markup(text: str, url_replacements: Mapping[str, str]) -> str:
    """Apply every rewrite, in order, to one description or deprecation text."""
    for pattern, replacement in _LEGACY_MARKUP:
        text = pattern.sub(replacement, text)
    text = replace_url_placeholders(text, url_replacements)
    text = replace_relative_hrefs(text, url_replacements)
    text = _DOUBLE_BACKTICK.sub(r"<val>\1</val>", text)
    text = _SINGLE_BACKTICK.sub(r"<val>\1</val>", text)
    return rebrand(text)
