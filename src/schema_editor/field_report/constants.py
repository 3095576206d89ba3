"""Shared field report constants."""

from __future__ import annotations

FIELDS_SHEET_NAME = "Fields"
SCHEMA_SHEET_NAME = "Schema"

FIELD_COLUMNS: tuple[str, ...] = ("Path", "Name", "Type", "Required", "Description")
