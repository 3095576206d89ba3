"""Schema repository exports."""

from .repository import (
    SchemaNotFoundError,
    SchemaRepository,
    SchemaStorageError,
    generate_schema_id,
)
from .schema_exchange import (
    IMPORTED_SCHEMA_TITLE,
    SchemaImportError,
    export_file_name,
    export_schema_text,
    parse_imported_schema,
    read_imported_schema,
    validate_schema_shape,
    write_schema_export,
)
from .stored_schemas import StoredSchema

__all__ = [
    "IMPORTED_SCHEMA_TITLE",
    "SchemaImportError",
    "SchemaNotFoundError",
    "SchemaRepository",
    "SchemaStorageError",
    "StoredSchema",
    "export_file_name",
    "export_schema_text",
    "generate_schema_id",
    "parse_imported_schema",
    "read_imported_schema",
    "validate_schema_shape",
    "write_schema_export",
]
