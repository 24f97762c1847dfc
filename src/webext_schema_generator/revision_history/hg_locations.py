"""Mercurial repository access through raw-file and json-log URLs."""

from __future__ import annotations

import json
from typing import Protocol

from webext_schema_generator.remote_sources import FetchError, TextFetcher

HG_URL = "https://hg-edge.mozilla.org"
DEFAULT_REVISION_COUNT = 125
COMM_SCHEMA_FOLDER = "mail/components/extensions/schemas"
COMM_VERSION_FILE = "mail/config/version_display.txt"


class RevisionSource(Protocol):
    """Protocol for collaborators serving historical file content."""

    def revision_log(self, file_path: str, until_revision: str) -> list[str]: ...

    def read_file(self, file_path: str, revision: str) -> str: ...


def repository_root(hg_url: str, repository: str) -> str:
    """Base URL of a repository, release repositories live below `releases/`."""
    prefix = "" if repository.endswith("central") else "releases/"
    return f"{hg_url}/{prefix}{repository}"


def raw_file_url(hg_url: str, repository: str, file_path: str, revision: str) -> str:
    return f"{repository_root(hg_url, repository)}/raw-file/{revision}/{file_path}"


def revision_log_url(
    hg_url: str,
    repository: str,
    file_path: str,
    revision: str,
    revision_count: int = DEFAULT_REVISION_COUNT,
) -> str:
    return (
        f"{repository_root(hg_url, repository)}/json-log/{revision}/{file_path}"
        f"?revcount={revision_count}"
    )


class HgRepository:
    """Revision source backed by one hg.mozilla.org repository."""

    def __init__(
        self,
        fetcher: TextFetcher,
        repository: str,
        *,
        hg_url: str = HG_URL,
        revision_count: int = DEFAULT_REVISION_COUNT,
    ) -> None:
        self._fetcher = fetcher
        self._repository = repository
        self._hg_url = hg_url
        self._revision_count = revision_count

    @property
    def repository(self) -> str:
        return self._repository

    def revision_log(self, file_path: str, until_revision: str) -> list[str]:
        """Revision identifiers touching a file, newest first, bounded by revision_count."""
        url = revision_log_url(
            self._hg_url, self._repository, file_path, until_revision, self._revision_count
        )
        text = self._fetcher.read(url, temporary=until_revision == "tip")
        try:
            entries = json.loads(text)["entries"]
            return [entry["node"] for entry in entries]
        except (json.JSONDecodeError, KeyError, TypeError) as exc:
            raise FetchError(f"Malformed revision log received from {url}") from exc

    def read_file(self, file_path: str, revision: str) -> str:
        url = raw_file_url(self._hg_url, self._repository, file_path, revision)
        return self._fetcher.read(url, temporary=revision == "tip")
