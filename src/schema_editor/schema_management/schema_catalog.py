"""Schema constructors and display classification."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .schema_models import DRAFT_07_SCHEMA_URI, JsonSchema

_DATE_FORMATS = frozenset({"date", "date-time"})


def create_empty_schema(
    title: str = "New Schema", *, schema_uri: str = DRAFT_07_SCHEMA_URI
) -> JsonSchema:
    """Return a new object schema with no properties and an empty `required` list."""
    return {
        "$schema": schema_uri,
        "title": title,
        "type": "object",
        "properties": {},
        "required": [],
    }


def get_schema_type(schema: Mapping[str, Any]) -> str:
    """Return a single-line type label for display.

    Union types drop `null` and join the remaining members with `" | "`,
    `integer` is shown as `number` and `date`/`date-time` formats as `date`.
    Never raises and never returns an empty label.
    """
    if not isinstance(schema, Mapping):
        return "any"

    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        members = [str(value) for value in schema_type if value != "null"]
        return " | ".join(members) if members else ("null" if schema_type else "any")
    if schema_type == "integer":
        return "number"
    if schema.get("format") in _DATE_FORMATS:
        return "date"
    if isinstance(schema_type, str) and schema_type:
        return schema_type
    return "any"
