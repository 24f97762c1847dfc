"""Schema management exports."""

from .schema_models import SchemaFile, SchemaInfo, SchemaOwner
from .schema_reading import (
    SchemaError,
    list_json_files,
    parse_schema_text,
    read_json_document,
    read_schema_file,
    read_schema_folder,
)

__all__ = [
    "SchemaError",
    "SchemaFile",
    "SchemaInfo",
    "SchemaOwner",
    "list_json_files",
    "parse_schema_text",
    "read_json_document",
    "read_schema_file",
    "read_schema_folder",
]
