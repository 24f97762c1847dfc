"""Remote text retrieval with a persistent and a temporary on-disk cache."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)

PERSISTENT_CACHE_FILE = "persistent_schema_cache.json"
TEMPORARY_CACHE_FILE = "temporary_schema_cache.json"


class FetchError(Exception):
    """Raised when remote content cannot be retrieved."""


class TextFetcher(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for collaborators returning the text content of a URL."""

    def read(self, url: str, *, temporary: bool = False) -> str: ...


class CachedFetcher:
    """Fetch URLs once per cache class and keep their content on disk.

    Content of moving targets (for example the `tip` revision) belongs in the
    temporary cache, which can be deleted without losing the persistent one.
    """

    def __init__(
        self,
        cache_dir: Path,
        *,
        timeout_seconds: int = 30,
        client: httpx.Client | None = None,
    ) -> None:
        self._cache_dir = cache_dir
        self._client = client or httpx.Client(timeout=timeout_seconds, follow_redirects=True)
        self._caches: dict[str, dict[str, str]] = {}

    def read(self, url: str, *, temporary: bool = False) -> str:
        cache_file = TEMPORARY_CACHE_FILE if temporary else PERSISTENT_CACHE_FILE
        cache = self._load_cache(cache_file)
        if url not in cache:
            cache[url] = self._download(url)
            self._store_cache(cache_file, cache)
        return cache[url]

    def close(self) -> None:
        self._client.close()

    def _download(self, url: str) -> str:
        logger.info("downloading %s", url)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}") from exc
        if response.status_code != 200:
            raise FetchError(f"Failed to fetch {url}: HTTP {response.status_code}")
        return response.text

    def _load_cache(self, cache_file: str) -> dict[str, str]:
        if cache_file not in self._caches:
            path = self._cache_dir / cache_file
            entries: list[list[str]] = []
            if path.exists():
                try:
                    entries = json.loads(path.read_text(encoding="utf-8"))
                except json.JSONDecodeError:
                    logger.warning("Ignoring unreadable cache file %s", path)
            self._caches[cache_file] = {url: content for url, content in entries}
        return self._caches[cache_file]

    def _store_cache(self, cache_file: str, cache: dict[str, str]) -> None:
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        path = self._cache_dir / cache_file
        payload = [[url, text] for url, text in cache.items()]
        path.write_text(json.dumps(payload, indent=4), encoding="utf-8")
