"""Cached fetcher tests."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from webext_schema_generator.remote_sources import CachedFetcher, FetchError

URL = "https://hg-edge.mozilla.org/comm-central/raw-file/abc/mail/config/version_display.txt"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _counting_handler(requests: list[str], text: str = "128.0a1\n"):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(str(request.url))
        return httpx.Response(200, text=text)

    return handler


def test_content_is_downloaded_once_and_mirrored_to_the_cache_file(tmp_path: Path) -> None:
    requests: list[str] = []
    fetcher = CachedFetcher(tmp_path, client=_client(_counting_handler(requests)))

    first = fetcher.read(URL)
    second = fetcher.read(URL)

    assert first == second == "128.0a1\n"
    assert requests == [URL]
    stored = json.loads((tmp_path / "persistent_schema_cache.json").read_text(encoding="utf-8"))
    assert stored == [[URL, "128.0a1\n"]]


def test_cache_file_is_reused_by_a_new_fetcher(tmp_path: Path) -> None:
    CachedFetcher(tmp_path, client=_client(_counting_handler([]))).read(URL)
    requests: list[str] = []

    content = CachedFetcher(tmp_path, client=_client(_counting_handler(requests))).read(URL)

    assert content == "128.0a1\n"
    assert requests == []


def test_temporary_content_goes_into_its_own_cache_file(tmp_path: Path) -> None:
    fetcher = CachedFetcher(tmp_path, client=_client(_counting_handler([])))

    fetcher.read(URL, temporary=True)

    assert (tmp_path / "temporary_schema_cache.json").exists()
    assert not (tmp_path / "persistent_schema_cache.json").exists()


def test_non_200_response_raises_fetch_error(tmp_path: Path) -> None:
    fetcher = CachedFetcher(
        tmp_path, client=_client(lambda request: httpx.Response(404, text="not found"))
    )

    with pytest.raises(FetchError, match="HTTP 404"):
        fetcher.read(URL)


def test_transport_error_raises_fetch_error(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = CachedFetcher(tmp_path, client=_client(handler))

    with pytest.raises(FetchError, match="connection refused"):
        fetcher.read(URL)
    assert not (tmp_path / "persistent_schema_cache.json").exists()
