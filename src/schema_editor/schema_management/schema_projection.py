"""Schema to field-tree projection service."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from .schema_models import JsonSchema, SchemaField

ARRAY_SEGMENT_SUFFIX = "[]"


def schema_to_fields(schema: Mapping[str, Any], parent_path: str = "") -> list[SchemaField]:
    """Project an object schema into ordered display fields.

    Only object schemas with a non-empty `properties` mapping produce fields.
    Every other input, including malformed nodes, yields an empty list.
    """
    properties = _object_properties(schema)
    if not properties:
        return []

    fields: list[SchemaField] = []
    for name, child in properties.items():
        path = f"{parent_path}.{name}" if parent_path else str(name)
        fields.append(
            SchemaField(
                name=str(name),
                path=path,
                schema=child,
                children=_child_fields(child, path),
            )
        )
    return fields


def iter_fields(fields: Iterable[SchemaField]) -> Iterator[tuple[int, SchemaField]]:
    """Yield `(depth, field)` pairs in depth-first display order."""
    stack: list[tuple[int, SchemaField]] = [(0, field) for field in reversed(list(fields))]
    while stack:
        depth, field = stack.pop()
        yield depth, field
        if field.children:
            stack.extend((depth + 1, child) for child in reversed(field.children))


def find_field(fields: Iterable[SchemaField], path: str) -> SchemaField | None:
    """Return the field with the given display path, if any."""
    for _, field in iter_fields(fields):
        if field.path == path:
            return field
    return None


def _child_fields(child: Any, path: str) -> tuple[SchemaField, ...] | None:
    if not isinstance(child, Mapping):
        return None
    if child.get("type") == "object" and child.get("properties"):
        return tuple(schema_to_fields(child, path))
    items = child.get("items")
    if child.get("type") == "array" and items is not None:
        return tuple(schema_to_fields(items, f"{path}{ARRAY_SEGMENT_SUFFIX}"))
    return None


def _object_properties(schema: Any) -> Mapping[str, JsonSchema] | None:
    if not isinstance(schema, Mapping) or schema.get("type") != "object":
        return None
    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        return None
    return properties
