"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StorageSettings:
    """Location of the persisted schema list."""

    path: Path


@dataclass(frozen=True)
class ExportSettings:
    """Defaults for exported schema files."""

    directory: Path
    indent: int


@dataclass(frozen=True)
class LoggingSettings:
    """Log verbosity for CLI runs."""

    level: str


@dataclass(frozen=True)
class EditorConfiguration:
    """Top-level configuration aggregate."""

    path: Path | None
    storage: StorageSettings
    export: ExportSettings
    logging: LoggingSettings
