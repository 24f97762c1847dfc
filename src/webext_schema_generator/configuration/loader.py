"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    CompatSettings,
    Configuration,
    GenerationSettings,
    RemoteSettings,
    SourceSettings,
)

SUPPORTED_MANIFEST_VERSIONS = (2, 3)
DOC_RELEASES = ("beta", "esr", "release")
DEFAULT_URL_PLACEHOLDERS = "comm/mail/components/extensions/annotations/url-placeholders.json"
DEFAULT_HG_URL = "https://hg-edge.mozilla.org"
DEFAULT_API_DOC_BASE_URL = "https://webextension-api.thunderbird.net/en"
DEFAULT_CACHE_DIR = ".schema-cache"
CHECKOUT_PREFIX = "mozilla-"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(
    config_path: Path | str,
    *,
    manifest_version: int | None = None,
    output: Path | str | None = None,
) -> Configuration:
    """Load and validate the configuration file, command line values take precedence."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.parent
    generation = _parse_generation_section(
        parsed.get("generation"),
        base_path,
        manifest_version=manifest_version,
        output=output,
    )
    sources = _parse_sources_section(parsed.get("sources"), base_path)
    compat = _parse_compat_section(parsed.get("compat"), base_path, release=sources.release)
    remote = _parse_remote_section(parsed.get("remote"), base_path)

    return Configuration(
        path=path,
        generation=generation,
        sources=sources,
        compat=compat,
        remote=remote,
    )


def _parse_generation_section(
    value: Any,
    base_path: Path,
    *,
    manifest_version: int | None,
    output: Path | str | None,
) -> GenerationSettings:
    section = _optional_mapping(value, "generation")
    raw_version = (
        manifest_version if manifest_version is not None else section.get("manifest_version")
    )
    version = _require_manifest_version(raw_version, "generation.manifest_version")
    if output is not None:
        output_path = Path(output).resolve()
    else:
        output_path = _resolve_path(
            base_path, _require_non_empty_string(section.get("output"), "generation.output")
        )
    return GenerationSettings(manifest_version=version, output=output_path)


def _parse_sources_section(value: Any, base_path: Path) -> SourceSettings:
    section = _require_mapping(value, "sources")
    checkout = _resolve_path(
        base_path, _require_non_empty_string(section.get("checkout"), "sources.checkout")
    )
    if not (checkout / "comm").is_dir():
        raise ConfigurationError(f"sources.checkout '{checkout}' does not contain a comm/ folder.")
    release = _optional_string(section.get("release"), "sources.release") or release_from_checkout(
        checkout
    )
    comm_revision = _optional_string(section.get("comm_revision"), "sources.comm_revision") or "tip"
    placeholders = _optional_string(section.get("url_placeholders"), "sources.url_placeholders")
    url_placeholders = (
        _resolve_path(base_path, placeholders)
        if placeholders
        else checkout / DEFAULT_URL_PLACEHOLDERS
    )
    return SourceSettings(
        checkout=checkout,
        release=release,
        comm_revision=comm_revision,
        url_placeholders=url_placeholders,
    )


def _parse_compat_section(value: Any, base_path: Path, *, release: str) -> CompatSettings:
    section = _optional_mapping(value, "compat")
    firefox = _optional_bool(section.get("firefox"), "compat.firefox", default=True)
    thunderbird = _optional_bool(section.get("thunderbird"), "compat.thunderbird", default=True)
    validate_urls = _optional_bool(
        section.get("validate_documentation_urls"),
        "compat.validate_documentation_urls",
        default=True,
    )
    raw_data_path = _optional_string(section.get("data_path"), "compat.data_path")
    data_path = _resolve_path(base_path, raw_data_path) if raw_data_path else None
    if firefox and data_path is None:
        raise ConfigurationError("compat.data_path is required when compat.firefox is enabled.")
    if data_path is not None and not data_path.exists():
        raise ConfigurationError(f"Compat data file not found: {data_path}")

    doc_release = _optional_string(section.get("doc_release"), "compat.doc_release")
    if doc_release is not None and doc_release not in DOC_RELEASES:
        raise ConfigurationError(
            f"compat.doc_release must be one of {', '.join(DOC_RELEASES)}."
        )
    return CompatSettings(
        data_path=data_path,
        firefox=firefox,
        thunderbird=thunderbird,
        validate_documentation_urls=validate_urls,
        doc_release=doc_release or doc_release_for(release),
    )


def _parse_remote_section(value: Any, base_path: Path) -> RemoteSettings:
    section = _optional_mapping(value, "remote")
    hg_url = _optional_string(section.get("hg_url"), "remote.hg_url") or DEFAULT_HG_URL
    api_doc_base_url = (
        _optional_string(section.get("api_doc_base_url"), "remote.api_doc_base_url")
        or DEFAULT_API_DOC_BASE_URL
    )
    cache_dir = _resolve_path(
        base_path,
        _optional_string(section.get("cache_dir"), "remote.cache_dir") or DEFAULT_CACHE_DIR,
    )
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", 30), "remote.timeout_seconds"
    )
    revision_count = _require_positive_int(
        section.get("revision_count", 125), "remote.revision_count"
    )
    return RemoteSettings(
        hg_url=hg_url.rstrip("/"),
        api_doc_base_url=api_doc_base_url.rstrip("/"),
        cache_dir=cache_dir,
        timeout_seconds=timeout_seconds,
        revision_count=revision_count,
    )


def release_from_checkout(checkout: Path) -> str:
    """`mozilla-beta` checkouts belong to the beta release, anything else to central."""
    name = checkout.name
    if name.startswith(CHECKOUT_PREFIX) and len(name) > len(CHECKOUT_PREFIX):
        return name[len(CHECKOUT_PREFIX) :]
    return "central"


def doc_release_for(release: str) -> str | None:
    if release == "beta":
        return "beta"
    if release.startswith("esr"):
        return "esr"
    return None


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str, *, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value


def _require_manifest_version(value: Any, field_name: str) -> int:
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if value is None:
        raise ConfigurationError(f"{field_name} is required.")
    if isinstance(value, bool) or value not in SUPPORTED_MANIFEST_VERSIONS:
        raise ConfigurationError(
            f"Unsupported Manifest Version: <{value}>, expected one of "
            f"{', '.join(str(version) for version in SUPPORTED_MANIFEST_VERSIONS)}."
        )
    return int(value)
