"""File-backed schema repository service."""

from __future__ import annotations

import copy
import json
import logging
import secrets
import string
import threading
import time
from collections.abc import Callable, Mapping
from pathlib import Path

from schema_editor.schema_management import (
    DRAFT_2020_12_SCHEMA_URI,
    JsonSchema,
    create_empty_schema,
)

from .stored_schemas import STORED_ID_KEY, StoredSchema

LOGGER = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


class SchemaStorageError(Exception):
    """Raised when the schema store cannot be read or written."""


class SchemaNotFoundError(KeyError):
    """Raised when a schema id is not present in the repository."""

    def __str__(self) -> str:
        return f"Schema not found: {self.args[0]}"


def generate_schema_id() -> str:
    """Return a new identifier of the form `schema-<epoch ms>-<9 chars>`."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"schema-{int(time.time() * 1000)}-{suffix}"


class SchemaRepository:
    """Ordered list of schemas persisted as one JSON array.

    Every write goes through a lock so that concurrent edits of the same schema
    are applied one after another against the latest stored value.
    """

    def __init__(
        self,
        store_path: Path | str,
        *,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store_path = Path(store_path)
        self._id_factory = id_factory or generate_schema_id
        self._lock = threading.RLock()
        self._schemas: list[StoredSchema] = []
        self._selected_id: str | None = None

    @property
    def store_path(self) -> Path:
        return self._store_path

    @property
    def schemas(self) -> tuple[StoredSchema, ...]:
        return tuple(self._schemas)

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected(self) -> StoredSchema | None:
        if self._selected_id is None:
            return None
        return self._find(self._selected_id)

    def load(self) -> tuple[StoredSchema, ...]:
        """Read the store file; a missing file yields an empty repository."""
        if not self._store_path.exists():
            LOGGER.debug("Schema store %s does not exist yet", self._store_path)
            with self._lock:
                self._schemas = []
            return ()

        try:
            parsed = json.loads(self._store_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SchemaStorageError(f"Failed to load schemas: {exc}") from exc
        if not isinstance(parsed, list):
            raise SchemaStorageError("Schema store must contain a JSON array.")

        loaded: list[StoredSchema] = []
        for index, document in enumerate(parsed):
            if not isinstance(document, Mapping) or not isinstance(
                document.get(STORED_ID_KEY), str
            ):
                raise SchemaStorageError(f"Stored schema #{index} has no string id.")
            schema = {key: value for key, value in document.items() if key != STORED_ID_KEY}
            loaded.append(
                StoredSchema(id=document[STORED_ID_KEY], schema=schema)  # type: ignore[arg-type]
            )

        with self._lock:
            self._schemas = loaded
        LOGGER.info("Loaded %d schema(s) from %s", len(loaded), self._store_path)
        return tuple(loaded)

    def save(self) -> None:
        """Write all schemas to the store file.

        The array is written to a sibling temporary file that then replaces the
        store, so an interrupted save leaves the previous content in place.
        """
        with self._lock:
            documents = [stored.to_document() for stored in self._schemas]
        temporary_path = self._store_path.with_name(f"{self._store_path.name}.tmp")
        try:
            self._store_path.parent.mkdir(parents=True, exist_ok=True)
            temporary_path.write_text(json.dumps(documents, indent=2), encoding="utf-8")
            temporary_path.replace(self._store_path)
        except OSError as exc:
            temporary_path.unlink(missing_ok=True)
            raise SchemaStorageError(f"Failed to save schemas: {exc}") from exc
        LOGGER.debug("Saved %d schema(s) to %s", len(documents), self._store_path)

    def get(self, schema_id: str) -> StoredSchema:
        stored = self._find(schema_id)
        if stored is None:
            raise SchemaNotFoundError(schema_id)
        return stored

    def select(self, schema_id: str | None) -> None:
        """Select a schema for editing, or clear the selection with `None`."""
        if schema_id is not None:
            self.get(schema_id)
        self._selected_id = schema_id

    def create_schema(self, title: str = "NewSchema") -> StoredSchema:
        """Append an empty 2020-12 object schema, select it and persist."""
        schema = create_empty_schema(title, schema_uri=DRAFT_2020_12_SCHEMA_URI)
        return self.add(schema)

    def add(self, schema: JsonSchema) -> StoredSchema:
        """Append a schema under a new id, select it and persist."""
        stored = StoredSchema(id=self._id_factory(), schema=schema)
        with self._lock:
            self._schemas.append(stored)
            self._selected_id = stored.id
            self.save()
        LOGGER.info("Added schema %s (%s)", stored.id, stored.title)
        return stored

    def replace(self, schema_id: str, schema: JsonSchema) -> StoredSchema:
        """Replace the stored value of a schema wholesale and persist."""
        return self.update(schema_id, lambda _current: schema)

    def update(self, schema_id: str, edit: Callable[[JsonSchema], JsonSchema]) -> StoredSchema:
        """Apply `edit` to the current value of a schema as one atomic step."""
        with self._lock:
            index = self._index_of(schema_id)
            current = self._schemas[index]
            replacement = StoredSchema(id=current.id, schema=edit(current.schema))
            self._schemas[index] = replacement
            self.save()
        LOGGER.debug("Updated schema %s", schema_id)
        return replacement

    def duplicate(self, schema_id: str) -> StoredSchema:
        """Append a deep copy titled `<title>_copy`, select it and persist."""
        source = self.get(schema_id)
        schema = copy.deepcopy(source.schema)
        schema["title"] = f"{source.title or 'Schema'}_copy"
        return self.add(schema)

    def delete(self, schema_id: str) -> None:
        """Remove a schema; clears the selection when it pointed at it."""
        with self._lock:
            index = self._index_of(schema_id)
            del self._schemas[index]
            if self._selected_id == schema_id:
                self._selected_id = None
            self.save()
        LOGGER.info("Deleted schema %s", schema_id)

    def property_count(self, schema_id: str) -> int:
        properties = self.get(schema_id).schema.get("properties")
        return len(properties) if isinstance(properties, Mapping) else 0

    def _find(self, schema_id: str) -> StoredSchema | None:
        for stored in self._schemas:
            if stored.id == schema_id:
                return stored
        return None

    def _index_of(self, schema_id: str) -> int:
        for index, stored in enumerate(self._schemas):
            if stored.id == schema_id:
                return index
        raise SchemaNotFoundError(schema_id)
