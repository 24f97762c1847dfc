"""Reachability checks for generated documentation URLs."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)


class UrlChecker(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for collaborators validating that a URL can be retrieved."""

    def is_reachable(self, url: str, context: str = "") -> bool: ...


class UrlValidator:
    """Validate URLs with a GET request, remembering every answer for the run."""

    def __init__(self, *, timeout_seconds: int = 30, client: httpx.Client | None = None) -> None:
        self._client = client or httpx.Client(timeout=timeout_seconds, follow_redirects=True)
        self._results: dict[str, bool] = {}

    def is_reachable(self, url: str, context: str = "") -> bool:
        if url not in self._results:
            self._results[url] = self._check(url, context)
        return self._results[url]

    def close(self) -> None:
        self._client.close()

    def _check(self, url: str, context: str) -> bool:
        try:
            response = self._client.get(url)
        except httpx.HTTPError:
            logger.warning(" - problematic URL found: network error - %s - %s", context, url)
            return False
        if response.is_success:
            return True
        details = " - ".join(str(part) for part in (response.status_code, context, url) if part)
        logger.warning(" - problematic URL found: %s", details)
        return False
