"""Field report exports."""

from .constants import FIELD_COLUMNS, FIELDS_SHEET_NAME, SCHEMA_SHEET_NAME
from .field_workbook_builder import generate_field_workbook

__all__ = [
    "FIELDS_SHEET_NAME",
    "SCHEMA_SHEET_NAME",
    "FIELD_COLUMNS",
    "generate_field_workbook",
]
