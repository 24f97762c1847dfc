"""Schema management entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class SchemaOwner(str, Enum):
    """Source tree a schema file originates from."""

    FIREFOX = "firefox"
    THUNDERBIRD = "thunderbird"


@dataclass(frozen=True)
class SchemaFile:
    """Location of one schema or annotation file."""

    name: str
    directory: Path

    @property
    def path(self) -> Path:
        return self.directory / self.name


@dataclass(frozen=True)
class SchemaInfo:
    """One parsed schema file and the facts needed while processing it."""

    file: SchemaFile
    owner: SchemaOwner
    schema: list[Any]
    version_added: str | None = None
    version_removed: str | None = None

    @property
    def namespaces(self) -> tuple[str, ...]:
        return tuple(
            entry["namespace"]
            for entry in self.schema
            if isinstance(entry, dict) and isinstance(entry.get("namespace"), str)
        )
