"""JSON Schema file import and export."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from schema_editor.schema_management.schema_models import SCHEMA_TYPES, JsonSchema

from .stored_schemas import STORED_ID_KEY, StoredSchema

IMPORTED_SCHEMA_TITLE = "ImportedSchema"
EXPORT_FILE_SUFFIX = ".schema.json"

_SCHEMA_MAP_KEYWORDS = ("properties", "definitions")
_SCHEMA_LIST_KEYWORDS = ("allOf", "anyOf", "oneOf")
_SCHEMA_KEYWORDS = ("items", "not")

_UNSAFE_FILE_NAME_CHARS = re.compile(r"[\\/:*?\"<>|\x00-\x1f]+|\.\.+")


class SchemaImportError(Exception):
    """Raised when imported text is not a usable JSON Schema document."""


def export_schema_text(stored: StoredSchema, indent: int = 2) -> str:
    """Serialize a stored schema as pretty JSON without its repository id."""
    document = {key: value for key, value in stored.schema.items() if key != STORED_ID_KEY}
    return json.dumps(document, indent=indent, ensure_ascii=False)


def export_file_name(schema: Mapping[str, Any]) -> str:
    """Return `<title>.schema.json` with the title reduced to a plain file name."""
    title = schema.get("title")
    stem = title if isinstance(title, str) else ""
    stem = _UNSAFE_FILE_NAME_CHARS.sub("_", stem).strip(" .")
    return f"{(stem or 'schema').lower()}{EXPORT_FILE_SUFFIX}"


def write_schema_export(stored: StoredSchema, directory: Path | str, indent: int = 2) -> Path:
    """Write an exported schema into `directory` and return the resolved file path.

    Raises:
      OSError: If the file cannot be written or would land outside `directory`.
    """
    destination_dir = Path(directory)
    destination_dir.mkdir(parents=True, exist_ok=True)
    destination = (destination_dir / export_file_name(stored.schema)).resolve()
    if destination.parent != destination_dir.resolve():
        raise OSError(f"Refusing to export outside {destination_dir.resolve()}: {destination}")
    destination.write_text(export_schema_text(stored, indent=indent), encoding="utf-8")
    return destination


def parse_imported_schema(text: str) -> JsonSchema:
    """Parse imported text into a schema value.

    The document is shape-checked before it is accepted; a missing title is
    replaced with `ImportedSchema` and a stray repository `id` is dropped.

    Raises:
      SchemaImportError: If the text is not JSON or not a JSON Schema object.
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaImportError(f"Failed to import: invalid file ({exc})") from exc

    validate_schema_shape(parsed)
    schema: dict[str, Any] = {key: value for key, value in parsed.items() if key != STORED_ID_KEY}
    if not schema.get("title"):
        schema["title"] = IMPORTED_SCHEMA_TITLE
    return schema  # type: ignore[return-value]


def read_imported_schema(path: Path | str) -> JsonSchema:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaImportError(f"Failed to import: cannot read {source}: {exc}") from exc
    return parse_imported_schema(text)


def validate_schema_shape(node: Any, location: str = "#") -> None:
    """Check that a value has the structural shape of a schema document.

    Keyword semantics are not evaluated; only the container shapes that the
    projector and mutator walk are enforced.
    """
    if not isinstance(node, Mapping):
        raise SchemaImportError(f"{location}: schema must be a JSON object.")

    _validate_type_keyword(node.get("type"), location)

    required = node.get("required")
    if required is not None and (
        not isinstance(required, list) or not all(isinstance(item, str) for item in required)
    ):
        raise SchemaImportError(f"{location}/required: must be a list of strings.")

    for keyword in _SCHEMA_MAP_KEYWORDS:
        children = node.get(keyword)
        if children is None:
            continue
        if not isinstance(children, Mapping):
            raise SchemaImportError(f"{location}/{keyword}: must be a JSON object.")
        for name, child in children.items():
            validate_schema_shape(child, f"{location}/{keyword}/{name}")

    for keyword in _SCHEMA_LIST_KEYWORDS:
        children = node.get(keyword)
        if children is None:
            continue
        if not isinstance(children, list):
            raise SchemaImportError(f"{location}/{keyword}: must be a list of schemas.")
        for index, child in enumerate(children):
            validate_schema_shape(child, f"{location}/{keyword}/{index}")

    for keyword in _SCHEMA_KEYWORDS:
        if keyword in node:
            validate_schema_shape(node[keyword], f"{location}/{keyword}")

    additional = node.get("additionalProperties")
    if additional is not None and not isinstance(additional, bool):
        validate_schema_shape(additional, f"{location}/additionalProperties")


def _validate_type_keyword(value: Any, location: str) -> None:
    if value is None:
        return
    members = value if isinstance(value, list) else [value]
    if not members:
        raise SchemaImportError(f"{location}/type: must not be an empty list.")
    for member in members:
        if member not in SCHEMA_TYPES:
            raise SchemaImportError(f"{location}/type: unsupported type {member!r}.")
