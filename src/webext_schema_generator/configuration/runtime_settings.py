"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class GenerationSettings:
    """Target manifest version and output folder."""

    manifest_version: int
    output: Path


@dataclass(frozen=True)
class SourceSettings:
    """Local checkout and the repository identifiers used for remote lookups."""

    checkout: Path
    release: str
    comm_revision: str
    url_placeholders: Path

    @property
    def comm_repository(self) -> str:
        return f"comm-{self.release}"


@dataclass(frozen=True)
class CompatSettings:
    """Owner specific compat data toggles."""

    data_path: Path | None
    firefox: bool
    thunderbird: bool
    validate_documentation_urls: bool
    doc_release: str | None


@dataclass(frozen=True)
class RemoteSettings:
    """Remote hosts, caching and timeouts."""

    hg_url: str
    api_doc_base_url: str
    cache_dir: Path
    timeout_seconds: int
    revision_count: int


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    generation: GenerationSettings
    sources: SourceSettings
    compat: CompatSettings
    remote: RemoteSettings
