"""Results writing exports."""

from .output_writer import (
    prepare_output_dir,
    sort_keys,
    with_application_version,
    write_pretty_json,
    write_schema_files,
)
from .permission_strings import (
    PERMISSION_PREFIX,
    PERMISSIONS_FILENAME,
    extract_permission_strings,
    write_permission_strings,
)

__all__ = [
    "PERMISSIONS_FILENAME",
    "PERMISSION_PREFIX",
    "extract_permission_strings",
    "prepare_output_dir",
    "sort_keys",
    "with_application_version",
    "write_permission_strings",
    "write_pretty_json",
    "write_schema_files",
]
