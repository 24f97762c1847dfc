"""Application of annotation files to the schema files of the same name."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Collection, Mapping
from pathlib import Path
from typing import Any

from webext_schema_generator.schema_management import (
    SchemaInfo,
    list_json_files,
    read_schema_file,
)

from .annotation_merger import AnnotationMerger

logger = logging.getLogger(__name__)


def apply_annotation_folder(
    schemas: list[SchemaInfo],
    annotation_dir: Path,
    url_replacements: Mapping[str, str],
    *,
    skipped: Collection[str] = (),
) -> list[SchemaInfo]:
    """Merge every annotation file into its schema and record the version floors."""
    by_name = {info.file.name: index for index, info in enumerate(schemas)}
    merged = list(schemas)
    merger = AnnotationMerger(base_dir=annotation_dir, url_replacements=url_replacements)
    for annotation_file in list_json_files(annotation_dir):
        if annotation_file.name in skipped:
            continue
        if annotation_file.name not in by_name:
            logger.warning("No schema file found for annotation file %s", annotation_file.name)
            continue
        index = by_name[annotation_file.name]
        info = merged[index]
        logger.info("merging annotations of %s", annotation_file.name)
        schema = merger.merge(info.schema, read_schema_file(annotation_file), annotation_file.name)
        merged[index] = dataclasses.replace(
            info,
            schema=schema,
            version_added=schema_version_floor(schema, "version_added"),
            version_removed=schema_version_floor(schema, "version_removed"),
        )
    return merged


def schema_version_floor(schema: list[Any], key: str) -> Any:
    """First `key` annotation found on a top-level namespace entry, if any."""
    for entry in schema:
        if not isinstance(entry, Mapping):
            continue
        for annotation in entry.get("annotations") or []:
            if isinstance(annotation, Mapping) and key in annotation:
                return annotation[key]
    return None
