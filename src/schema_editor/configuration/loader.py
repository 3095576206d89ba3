"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    EditorConfiguration,
    ExportSettings,
    LoggingSettings,
    StorageSettings,
)

DEFAULT_STORE_FILENAME = "schemas.json"
DEFAULT_EXPORT_DIRECTORY = "exports"
DEFAULT_EXPORT_INDENT = 2
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def default_configuration(base_dir: Path | str = ".") -> EditorConfiguration:
    """Return the configuration used when no file is given."""
    base_path = Path(base_dir).resolve()
    return EditorConfiguration(
        path=None,
        storage=StorageSettings(path=base_path / DEFAULT_STORE_FILENAME),
        export=ExportSettings(
            directory=base_path / DEFAULT_EXPORT_DIRECTORY, indent=DEFAULT_EXPORT_INDENT
        ),
        logging=LoggingSettings(level=DEFAULT_LOG_LEVEL),
    )


def load_configuration(config_path: Path | str) -> EditorConfiguration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    return EditorConfiguration(
        path=path.resolve(),
        storage=_parse_storage_section(parsed.get("storage"), base_path),
        export=_parse_export_section(parsed.get("export"), base_path),
        logging=_parse_logging_section(parsed.get("logging")),
    )


def _parse_storage_section(value: Any, base_path: Path) -> StorageSettings:
    section = _optional_mapping(value, "storage")
    raw_path = section.get("path", DEFAULT_STORE_FILENAME)
    store_path = _require_non_empty_string(raw_path, "storage.path")
    return StorageSettings(path=_resolve_path(base_path, store_path))


def _parse_export_section(value: Any, base_path: Path) -> ExportSettings:
    section = _optional_mapping(value, "export")
    directory = _require_non_empty_string(
        section.get("directory", DEFAULT_EXPORT_DIRECTORY), "export.directory"
    )
    indent = _require_non_negative_int(
        section.get("indent", DEFAULT_EXPORT_INDENT), "export.indent"
    )
    return ExportSettings(directory=_resolve_path(base_path, directory), indent=indent)


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    level = _require_non_empty_string(section.get("level", DEFAULT_LOG_LEVEL), "logging.level")
    return LoggingSettings(level=normalize_log_level(level))


def normalize_log_level(value: str) -> str:
    """Return the upper-cased level name or raise for unknown levels."""
    level = value.strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(
            f"logging.level must be one of {', '.join(_LOG_LEVELS)}; got '{value}'."
        )
    return level


def log_level_number(level: str) -> int:
    return logging.getLevelName(normalize_log_level(level))


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


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


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value
