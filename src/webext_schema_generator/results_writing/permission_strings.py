"""Extraction of the permission strings from the Fluent locale files."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

PERMISSION_PREFIX = "webext-perms-description-"
PERMISSIONS_FILENAME = "permissions.ftl"
BRAND_PLACEHOLDER = "{ -brand-short-name }"
BRAND_NAME = "Thunderbird"

# Keys sometimes carry a numeric suffix added for locale updates.
_KEY_SUFFIX = re.compile(r"[\d\s]+$")


def extract_permission_strings(lines: Iterable[str]) -> list[str]:
    """Return the normalized `key = value` lines of all permission descriptions."""
    extracted = []
    for line in lines:
        if not line.startswith(PERMISSION_PREFIX):
            continue
        key, _, value = line.partition("=")
        key = _KEY_SUFFIX.sub("", key)
        value = value.strip().replace(BRAND_PLACEHOLDER, BRAND_NAME)
        extracted.append(f"{key} = {value}")
    return extracted


def write_permission_strings(locale_files: Iterable[Path], output_dir: Path) -> Path:
    """Collect the permission strings of all locale files into permissions.ftl."""
    collected: list[str] = []
    for path in locale_files:
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Permission locale file not found: %s", path)
            continue
        collected.extend(extract_permission_strings(content.split("\n")))
    target = output_dir / PERMISSIONS_FILENAME
    target.write_text("\n".join(collected) + "\n", encoding="utf-8")
    logger.info("wrote %d permission strings to %s", len(collected), target)
    return target
