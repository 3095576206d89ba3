"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-editor.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Editor configuration template for schema-editor.
# Every value below is optional; remove a key to fall back to its default.
# Relative paths are resolved against the directory of this file.

storage:
  # JSON file holding the list of edited schemas.
  path: "schemas.json"

export:
  # Directory that receives <title>.schema.json files from the export command.
  directory: "exports"
  # Indentation used for exported JSON Schema documents.
  indent: 2

logging:
  # One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
  level: "WARNING"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML editor configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the editor configuration template to the requested output path.

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
        raise FileExistsError(f"Editor configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
