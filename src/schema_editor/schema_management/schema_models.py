"""Schema management entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypedDict

JsonSchemaType = Literal["string", "number", "integer", "boolean", "object", "array", "null"]

SCHEMA_TYPES: tuple[str, ...] = (
    "string",
    "number",
    "integer",
    "boolean",
    "object",
    "array",
    "null",
)

DRAFT_07_SCHEMA_URI = "http://json-schema.org/draft-07/schema#"
DRAFT_2020_12_SCHEMA_URI = "https://json-schema.org/draft/2020-12/schema"

# Keys such as "$schema" and "not" are not valid identifiers, so the functional
# TypedDict form is required. Unknown keys still pass through at runtime.
JsonSchema = TypedDict(
    "JsonSchema",
    {
        "$schema": str,
        "$id": str,
        "title": str,
        "description": str,
        "type": "str | list[str]",
        "properties": "dict[str, JsonSchema]",
        "items": "JsonSchema",
        "required": list[str],
        "enum": list[Any],
        "const": Any,
        "default": Any,
        "minLength": int,
        "maxLength": int,
        "pattern": str,
        "format": str,
        "minimum": float,
        "maximum": float,
        "exclusiveMinimum": float,
        "exclusiveMaximum": float,
        "multipleOf": float,
        "minItems": int,
        "maxItems": int,
        "uniqueItems": bool,
        "minProperties": int,
        "maxProperties": int,
        "additionalProperties": "bool | JsonSchema",
        "allOf": "list[JsonSchema]",
        "anyOf": "list[JsonSchema]",
        "oneOf": "list[JsonSchema]",
        "not": "JsonSchema",
        "$ref": str,
        "definitions": "dict[str, JsonSchema]",
    },
    total=False,
)


@dataclass(frozen=True)
class SchemaField:
    """Display projection of one schema property.

    `schema` is shared by reference with the source document and must be treated
    as read-only.
    """

    name: str
    path: str
    schema: JsonSchema
    children: tuple[SchemaField, ...] | None = None
    expanded: bool = False
