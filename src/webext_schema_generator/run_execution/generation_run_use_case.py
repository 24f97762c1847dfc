"""Run execution use-case service."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from pathlib import Path

from webext_schema_generator.annotation_merging import (
    AnnotationMergeError,
    apply_annotation_folder,
)
from webext_schema_generator.compat_attachment import (
    CompatAttacher,
    CompatDatabase,
    ThunderbirdCompat,
    api_doc_slug,
    select_schemas,
)
from webext_schema_generator.configuration import (
    Configuration,
    ConfigurationError,
    load_configuration,
)
from webext_schema_generator.import_resolution import resolve_imports
from webext_schema_generator.remote_sources import (
    CachedFetcher,
    FetchError,
    TextFetcher,
    UrlChecker,
    UrlValidator,
)
from webext_schema_generator.results_writing import (
    write_permission_strings,
    write_schema_files,
)
from webext_schema_generator.revision_history import HgRepository, HistoricalRevisionResolver
from webext_schema_generator.schema_management import (
    SchemaError,
    SchemaInfo,
    SchemaOwner,
    read_json_document,
    read_schema_folder,
)
from webext_schema_generator.schema_processing import SchemaWalker

from .run_contracts import (
    ANNOTATION_FOLDER,
    FIREFOX_SCHEMA_FOLDERS,
    PERMISSION_LOCALE_FILES,
    THUNDERBIRD_SCHEMA_FOLDER,
    VERSION_DISPLAY_FILE,
    GenerationOutcome,
    GenerationRequest,
    RunArtifacts,
)

logger = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a generation run cannot be completed."""


def execute_schema_generation_run(
    request: GenerationRequest,
    *,
    fetcher: TextFetcher | None = None,
    url_checker: UrlChecker | None = None,
) -> GenerationOutcome:
    """Execute one full generation run and return the written artifacts.

    Remote collaborators are created from the configuration unless given; the
    ones created here are closed when the run ends.
    """
    configuration = _load_configuration(request)
    owned: list[CachedFetcher | UrlValidator] = []
    if fetcher is None and configuration.compat.thunderbird:
        fetcher = CachedFetcher(
            configuration.remote.cache_dir,
            timeout_seconds=configuration.remote.timeout_seconds,
        )
        owned.append(fetcher)
    if (
        url_checker is None
        and configuration.compat.thunderbird
        and configuration.compat.validate_documentation_urls
    ):
        url_checker = UrlValidator(timeout_seconds=configuration.remote.timeout_seconds)
        owned.append(url_checker)
    try:
        return _generate(configuration, fetcher=fetcher, url_checker=url_checker)
    except (SchemaError, AnnotationMergeError, FetchError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    finally:
        for collaborator in owned:
            collaborator.close()


def _load_configuration(request: GenerationRequest) -> Configuration:
    try:
        return load_configuration(
            request.config_path,
            manifest_version=request.manifest_version,
            output=request.output_dir,
        )
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc


def _generate(
    configuration: Configuration,
    *,
    fetcher: TextFetcher | None,
    url_checker: UrlChecker | None,
) -> GenerationOutcome:
    database = (
        CompatDatabase.from_path(configuration.compat.data_path)
        if configuration.compat.data_path is not None
        else None
    )
    artifacts = _load_run_artifacts(configuration, database)
    attacher = _build_compat_attacher(
        configuration, database, fetcher=fetcher, url_checker=url_checker
    )

    manifest_version = configuration.generation.manifest_version
    processed = []
    for info in artifacts.schemas:
        logger.info("processing %s (%s)", info.file.name, info.owner.value)
        walker = SchemaWalker(
            manifest_version,
            url_replacements=artifacts.url_replacements,
            element_hook=attacher.hook_for(info),
        )
        processed.append(dataclasses.replace(info, schema=walker.walk(info.schema)))

    output_dir = configuration.generation.output
    schema_files = write_schema_files(
        processed, output_dir, application_version=artifacts.application_version
    )
    checkout = configuration.sources.checkout
    permissions_file = write_permission_strings(
        [checkout / path for path in PERMISSION_LOCALE_FILES], output_dir
    )
    return GenerationOutcome(
        output_dir=output_dir,
        schema_files=tuple(schema_files),
        permissions_file=permissions_file,
        application_version=artifacts.application_version,
    )


def _load_run_artifacts(
    configuration: Configuration, database: CompatDatabase | None
) -> RunArtifacts:
    checkout = configuration.sources.checkout
    schemas: list[SchemaInfo] = []
    for folder in FIREFOX_SCHEMA_FOLDERS:
        schemas.extend(read_schema_folder(checkout / folder, SchemaOwner.FIREFOX))
    schemas.extend(
        read_schema_folder(checkout / THUNDERBIRD_SCHEMA_FOLDER, SchemaOwner.THUNDERBIRD)
    )
    schemas = select_schemas(schemas, database)

    # Import targets are searched in all selected schemas at once.
    corpus = [info.schema for info in schemas]
    schemas = [
        dataclasses.replace(info, schema=resolve_imports(corpus, info.schema)) for info in schemas
    ]

    url_replacements = _read_url_replacements(configuration.sources.url_placeholders)
    annotation_dir = checkout / ANNOTATION_FOLDER
    if annotation_dir.is_dir():
        schemas = apply_annotation_folder(
            schemas,
            annotation_dir,
            url_replacements,
            skipped={configuration.sources.url_placeholders.name},
        )
    else:
        logger.warning("Annotation folder not found: %s", annotation_dir)

    return RunArtifacts(
        configuration=configuration,
        schemas=tuple(schemas),
        url_replacements=url_replacements,
        application_version=_read_application_version(checkout / VERSION_DISPLAY_FILE),
    )


def _build_compat_attacher(
    configuration: Configuration,
    database: CompatDatabase | None,
    *,
    fetcher: TextFetcher | None,
    url_checker: UrlChecker | None,
) -> CompatAttacher:
    compat = configuration.compat
    remote = configuration.remote
    thunderbird = None
    if compat.thunderbird:
        version_search = None
        if fetcher is not None:
            repository = HgRepository(
                fetcher,
                configuration.sources.comm_repository,
                hg_url=remote.hg_url,
                revision_count=remote.revision_count,
            )
            version_search = HistoricalRevisionResolver(
                repository,
                manifest_version=configuration.generation.manifest_version,
                until_revision=configuration.sources.comm_revision,
            )
        thunderbird = ThunderbirdCompat(
            doc_slug=api_doc_slug(
                configuration.generation.manifest_version,
                compat.doc_release,
                remote.api_doc_base_url,
            ),
            url_checker=url_checker if compat.validate_documentation_urls else None,
            version_search=version_search,
        )
    return CompatAttacher(
        database=database if compat.firefox else None,
        thunderbird=thunderbird,
    )


def _read_url_replacements(path: Path) -> dict[str, str]:
    document = read_json_document(path)
    if not isinstance(document, Mapping):
        raise SchemaError(f"URL placeholder map {path} must be a JSON object")
    return {str(key): str(value) for key, value in document.items()}


def _read_application_version(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise SchemaError(f"Failed to read application version from {path}: {exc}") from exc
