"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from webext_schema_generator.configuration.runtime_settings import Configuration
from webext_schema_generator.schema_management.schema_models import SchemaInfo

FIREFOX_SCHEMA_FOLDERS = (
    "toolkit/components/extensions/schemas",
    "browser/components/extensions/schemas",
)
THUNDERBIRD_SCHEMA_FOLDER = "comm/mail/components/extensions/schemas"
ANNOTATION_FOLDER = "comm/mail/components/extensions/annotations"
VERSION_DISPLAY_FILE = "comm/mail/config/version_display.txt"
PERMISSION_LOCALE_FILES = (
    "toolkit/locales/en-US/toolkit/global/extensionPermissions.ftl",
    "comm/mail/locales/en-US/messenger/extensionPermissions.ftl",
)


@dataclass(frozen=True)
class GenerationRequest:
    """Input contract for executing one generation run."""

    config_path: str
    manifest_version: int | None = None
    output_dir: str | None = None


@dataclass(frozen=True)
class GenerationOutcome:
    """Output contract for one completed generation run."""

    output_dir: Path
    schema_files: tuple[Path, ...]
    permissions_file: Path
    application_version: str


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded inputs required while generating."""

    configuration: Configuration
    schemas: tuple[SchemaInfo, ...]
    url_replacements: dict[str, str]
    application_version: str
