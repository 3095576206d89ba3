"""Copy-on-write schema property mutations."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .schema_models import SCHEMA_TYPES, JsonSchema
from .schema_projection import ARRAY_SEGMENT_SUFFIX

SchemaEdit = Callable[[JsonSchema], JsonSchema]


class SchemaMutationError(Exception):
    """Raised when a schema cannot be edited as requested."""


def add_property(
    schema: JsonSchema,
    name: str,
    type: str,
    *,
    description: str | None = None,
    required: bool = False,
) -> JsonSchema:
    """Return a copy of `schema` with `name` set to a fresh property of `type`.

    An existing property with the same name is replaced. Object properties start
    with empty `properties`; array properties default to string items. With
    `required=True` the name is appended to `required` unless already listed.

    Raises:
      SchemaMutationError: If `type` is not a JSON Schema type or `schema` is
        typed as something other than an object.
    """
    if type not in SCHEMA_TYPES:
        raise SchemaMutationError(f"Unsupported property type: {type}")
    _require_object_schema(schema)
    if not name:
        raise SchemaMutationError("Property name must not be empty.")

    property_schema: JsonSchema = {"type": type}
    if description:
        property_schema["description"] = description
    if type == "object":
        property_schema["properties"] = {}
    elif type == "array":
        property_schema["items"] = {"type": "string"}

    updated: JsonSchema = dict(schema)  # type: ignore[assignment]
    updated["properties"] = {**_properties_of(schema), name: property_schema}

    if required:
        existing = list(_required_of(schema))
        if name not in existing:
            existing.append(name)
        updated["required"] = existing
    return updated


def remove_property(schema: JsonSchema, name: str) -> JsonSchema:
    """Return a copy of `schema` without property `name` or its `required` entry.

    Removing an absent property is a no-op apart from the copy.
    """
    updated: JsonSchema = dict(schema)  # type: ignore[assignment]
    updated["properties"] = {
        key: value for key, value in _properties_of(schema).items() if key != name
    }
    updated["required"] = [entry for entry in _required_of(schema) if entry != name]
    return updated


def update_at_path(schema: JsonSchema, field_path: str, edit: SchemaEdit) -> JsonSchema:
    """Apply `edit` to the node addressed by a field path and return a new root.

    Paths use the projector's notation (`address.city`, `items[].sku`). Only the
    nodes along the path are copied; siblings stay shared with the input. An
    empty path applies `edit` to the root itself.
    """
    segments = _split_field_path(field_path)
    return _update_segments(schema, segments, edit, field_path)


def _update_segments(
    node: JsonSchema, segments: list[tuple[str, bool]], edit: SchemaEdit, field_path: str
) -> JsonSchema:
    if not segments:
        return edit(node)

    (name, into_items), remaining = segments[0], segments[1:]
    properties = _properties_of(node)
    child = properties.get(name)
    if not isinstance(child, Mapping):
        raise SchemaMutationError(f"Field path '{field_path}' does not exist in schema.")

    if into_items:
        items = child.get("items")
        if not isinstance(items, Mapping):
            raise SchemaMutationError(f"Field '{name}' in '{field_path}' has no array items.")
        new_child: JsonSchema = dict(child)  # type: ignore[assignment]
        new_child["items"] = _update_segments(
            items, remaining, edit, field_path  # type: ignore[arg-type]
        )
    else:
        new_child = _update_segments(child, remaining, edit, field_path)  # type: ignore[arg-type]

    updated: JsonSchema = dict(node)  # type: ignore[assignment]
    updated["properties"] = {**properties, name: new_child}
    return updated


def _split_field_path(field_path: str) -> list[tuple[str, bool]]:
    segments: list[tuple[str, bool]] = []
    for raw in field_path.split(".") if field_path else []:
        into_items = raw.endswith(ARRAY_SEGMENT_SUFFIX)
        name = raw[: -len(ARRAY_SEGMENT_SUFFIX)] if into_items else raw
        if not name:
            raise SchemaMutationError(f"Invalid field path: '{field_path}'")
        segments.append((name, into_items))
    return segments


def _require_object_schema(schema: Any) -> None:
    if not isinstance(schema, Mapping):
        raise SchemaMutationError("Schema must be a JSON object.")
    schema_type = schema.get("type")
    if schema_type is None or schema_type == "object":
        return
    if isinstance(schema_type, list) and "object" in schema_type:
        return
    raise SchemaMutationError(f"Cannot add properties to a '{schema_type}' schema.")


def _properties_of(schema: Mapping[str, Any]) -> Mapping[str, Any]:
    properties = schema.get("properties")
    return properties if isinstance(properties, Mapping) else {}


def _required_of(schema: Mapping[str, Any]) -> list[str]:
    required = schema.get("required")
    return list(required) if isinstance(required, list) else []
