"""Excel field report generation service."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from schema_editor.schema_management import (
    JsonSchema,
    SchemaField,
    get_schema_type,
    iter_fields,
)

from .constants import FIELD_COLUMNS, FIELDS_SHEET_NAME, SCHEMA_SHEET_NAME

_INDENT = "  "


def generate_field_workbook(
    schema: JsonSchema,
    fields: Sequence[SchemaField],
    output_path: Path | str,
) -> Path:
    """Create a workbook listing every projected field and the source schema."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = FIELDS_SHEET_NAME

    for column_index, name in enumerate(FIELD_COLUMNS, start=1):
        sheet.cell(row=1, column=column_index, value=name).style = "Headline 1"

    widths = [len(name) for name in FIELD_COLUMNS]
    for row_index, row in enumerate(_field_rows(schema, fields), start=2):
        for column_index, value in enumerate(row, start=1):
            sheet.cell(row=row_index, column=column_index, value=_cell_text(value))
            widths[column_index - 1] = max(widths[column_index - 1], len(str(value)))
    for column_index, width in enumerate(widths, start=1):
        sheet.column_dimensions[get_column_letter(column_index)].width = max(12, min(width + 4, 60))
    sheet.freeze_panes = "A2"

    _write_schema_sheet(workbook, schema)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    return output_path.resolve()


def _field_rows(schema: JsonSchema, fields: Sequence[SchemaField]) -> list[tuple[str, ...]]:
    required_by_path = _required_paths(schema)
    rows: list[tuple[str, ...]] = []
    for depth, field in iter_fields(fields):
        description = field.schema.get("description") if isinstance(field.schema, Mapping) else None
        rows.append(
            (
                field.path,
                f"{_INDENT * depth}{field.name}",
                get_schema_type(field.schema),
                "yes" if field.path in required_by_path else "",
                description if isinstance(description, str) else "",
            )
        )
    return rows


def _required_paths(schema: Any, parent_path: str = "") -> set[str]:
    if not isinstance(schema, Mapping):
        return set()
    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        return set()
    required = schema.get("required")
    required_names = set(required) if isinstance(required, list) else set()

    paths: set[str] = set()
    for name, child in properties.items():
        path = f"{parent_path}.{name}" if parent_path else name
        if name in required_names:
            paths.add(path)
        if isinstance(child, Mapping) and child.get("type") == "array":
            paths |= _required_paths(child.get("items"), f"{path}[]")
        else:
            paths |= _required_paths(child, path)
    return paths


def _write_schema_sheet(workbook: Workbook, schema: JsonSchema) -> None:
    sheet = workbook.create_sheet(SCHEMA_SHEET_NAME)
    schema_text = json.dumps(schema, indent=2, ensure_ascii=False)
    schema_hash = hashlib.sha256(schema_text.encode("utf-8")).hexdigest()
    entries = [
        ("title", str(schema.get("title", ""))),
        ("schema_hash", schema_hash),
        ("schema_text", schema_text),
    ]
    for row_index, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row_index, column=1, value=key)
        sheet.cell(row=row_index, column=2, value=_cell_text(value))


def _cell_text(value: str) -> str:
    """Drop control characters that worksheets cannot store."""
    return ILLEGAL_CHARACTERS_RE.sub("", value)
