"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import (
    ConfigurationError,
    default_configuration,
    load_configuration,
    log_level_number,
    normalize_log_level,
)
from .runtime_settings import (
    EditorConfiguration,
    ExportSettings,
    LoggingSettings,
    StorageSettings,
)

__all__ = [
    "EditorConfiguration",
    "ExportSettings",
    "LoggingSettings",
    "StorageSettings",
    "ConfigurationError",
    "default_configuration",
    "load_configuration",
    "log_level_number",
    "normalize_log_level",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
