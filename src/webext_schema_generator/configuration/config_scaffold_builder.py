"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-generator.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Generator configuration template for webext-schema-generator.
# Replace every <REQUIRED> placeholder before running generate.
# Replace <OPTIONAL> placeholders only when your setup needs them, or remove them.

generation:
  # Manifest version of the generated schemas, 2 or 3.
  manifest_version: "<REQUIRED>"
  # Output folder, it is cleared before the generated files are written.
  output: "<REQUIRED>"

sources:
  # Local mozilla checkout, comm/ must be checked out inside of it.
  checkout: "<REQUIRED>"
  # Defaults to the checkout folder name without its mozilla- prefix, else central.
  release: "<OPTIONAL>"
  # Newest comm revision considered by the historical version search.
  comm_revision: "<OPTIONAL>"
  url_placeholders: "<OPTIONAL>"

compat:
  # browser-compat-data JSON, required while firefox compat data is enabled.
  data_path: "<REQUIRED>"
  firefox: "<OPTIONAL>"
  thunderbird: "<OPTIONAL>"
  validate_documentation_urls: "<OPTIONAL>"
  # beta, esr or release.
  doc_release: "<OPTIONAL>"

remote:
  hg_url: "<OPTIONAL>"
  api_doc_base_url: "<OPTIONAL>"
  cache_dir: "<OPTIONAL>"
  timeout_seconds: "<OPTIONAL>"
  revision_count: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML generator configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder generator configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
