"""Schema management exports."""

from .schema_catalog import create_empty_schema, get_schema_type
from .schema_models import (
    DRAFT_07_SCHEMA_URI,
    DRAFT_2020_12_SCHEMA_URI,
    SCHEMA_TYPES,
    JsonSchema,
    JsonSchemaType,
    SchemaField,
)
from .schema_mutation import (
    SchemaEdit,
    SchemaMutationError,
    add_property,
    remove_property,
    update_at_path,
)
from .schema_projection import find_field, iter_fields, schema_to_fields

__all__ = [
    "DRAFT_07_SCHEMA_URI",
    "DRAFT_2020_12_SCHEMA_URI",
    "SCHEMA_TYPES",
    "JsonSchema",
    "JsonSchemaType",
    "SchemaEdit",
    "SchemaField",
    "SchemaMutationError",
    "add_property",
    "create_empty_schema",
    "find_field",
    "get_schema_type",
    "iter_fields",
    "remove_property",
    "schema_to_fields",
    "update_at_path",
]
