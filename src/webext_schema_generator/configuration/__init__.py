"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import (
    ConfigurationError,
    doc_release_for,
    load_configuration,
    release_from_checkout,
)
from .runtime_settings import (
    CompatSettings,
    Configuration,
    GenerationSettings,
    RemoteSettings,
    SourceSettings,
)

__all__ = [
    "CompatSettings",
    "Configuration",
    "GenerationSettings",
    "RemoteSettings",
    "SourceSettings",
    "ConfigurationError",
    "doc_release_for",
    "load_configuration",
    "release_from_checkout",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
