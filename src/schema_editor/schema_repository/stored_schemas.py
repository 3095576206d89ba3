"""Schema repository entities."""

from __future__ import annotations

from dataclasses import dataclass

from schema_editor.schema_management.schema_models import JsonSchema

STORED_ID_KEY = "id"


@dataclass(frozen=True)
class StoredSchema:
    """Schema document tracked by the repository under a host-only identifier."""

    id: str
    schema: JsonSchema

    @property
    def title(self) -> str | None:
        title = self.schema.get("title")
        return title if isinstance(title, str) else None

    def to_document(self) -> dict[str, object]:
        """Return the persisted form: the schema with its `id` key added."""
        return {**self.schema, STORED_ID_KEY: self.id}
