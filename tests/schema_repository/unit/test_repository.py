"""Schema repository service tests."""

from __future__ import annotations

import itertools
import json
import re
import threading
from pathlib import Path

import pytest
from schema_editor.schema_management import DRAFT_2020_12_SCHEMA_URI, add_property
from schema_editor.schema_repository.repository import (
    SchemaNotFoundError,
    SchemaRepository,
    SchemaStorageError,
    generate_schema_id,
)


def _repository(tmp_path: Path) -> SchemaRepository:
    counter = itertools.count(1)
    return SchemaRepository(
        tmp_path / "schemas.json", id_factory=lambda: f"schema-{next(counter)}"
    )


def test_generate_schema_id_format() -> None:
    assert re.fullmatch(r"schema-\d+-[a-z0-9]{9}", generate_schema_id())
    assert generate_schema_id() != generate_schema_id()


def test_load_missing_store_yields_empty_repository(tmp_path: Path) -> None:
    repository = _repository(tmp_path)

    assert repository.load() == ()
    assert repository.selected is None


def test_create_schema_selects_and_persists(tmp_path: Path) -> None:
    repository = _repository(tmp_path)

    stored = repository.create_schema()

    assert stored.id == "schema-1"
    assert stored.schema == {
        "$schema": DRAFT_2020_12_SCHEMA_URI,
        "title": "NewSchema",
        "type": "object",
        "properties": {},
        "required": [],
    }
    assert repository.selected == stored
    persisted = json.loads((tmp_path / "schemas.json").read_text(encoding="utf-8"))
    assert persisted == [{**stored.schema, "id": "schema-1"}]


def test_load_reads_previously_saved_schemas(tmp_path: Path) -> None:
    first = _repository(tmp_path)
    first.create_schema("Customer")
    first.create_schema("Order")

    second = SchemaRepository(tmp_path / "schemas.json")
    loaded = second.load()

    assert [stored.id for stored in loaded] == ["schema-1", "schema-2"]
    assert [stored.title for stored in loaded] == ["Customer", "Order"]
    assert all("id" not in stored.schema for stored in loaded)


@pytest.mark.parametrize(
    "contents",
    ["{broken", json.dumps({"id": "x"}), json.dumps([{"title": "no id"}]), json.dumps([42])],
)
def test_load_rejects_unusable_store(tmp_path: Path, contents: str) -> None:
    (tmp_path / "schemas.json").write_text(contents, encoding="utf-8")

    with pytest.raises(SchemaStorageError):
        _repository(tmp_path).load()


def test_replace_swaps_schema_value(tmp_path: Path) -> None:
    repository = _repository(tmp_path)
    stored = repository.create_schema()
    edited = add_property(stored.schema, "name", "string", required=True)

    replaced = repository.replace(stored.id, edited)

    assert replaced.id == stored.id
    assert repository.get(stored.id).schema == edited
    assert stored.schema["properties"] == {}
    reloaded = SchemaRepository(repository.store_path).load()
    assert reloaded[0].schema["required"] == ["name"]


def test_concurrent_updates_are_not_lost(tmp_path: Path) -> None:
    repository = _repository(tmp_path)
    stored = repository.create_schema()
    names = [f"field_{index}" for index in range(20)]

    threads = [
        threading.Thread(
            target=repository.update,
            args=(stored.id, lambda schema, name=name: add_property(schema, name, "string")),
        )
        for name in names
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(repository.get(stored.id).schema["properties"]) == sorted(names)


def test_duplicate_deep_copies_with_copy_title(tmp_path: Path) -> None:
    repository = _repository(tmp_path)
    original = repository.create_schema("Customer")
    repository.replace(original.id, add_property(original.schema, "address", "object"))

    duplicate = repository.duplicate(original.id)
    duplicate.schema["properties"]["address"]["properties"]["city"] = {"type": "string"}

    assert duplicate.id == "schema-2"
    assert duplicate.title == "Customer_copy"
    assert repository.selected_id == duplicate.id
    assert repository.get(original.id).schema["properties"]["address"]["properties"] == {}


def test_duplicate_untitled_schema(tmp_path: Path) -> None:
    repository = _repository(tmp_path)
    stored = repository.add({"type": "object"})

    assert repository.duplicate(stored.id).title == "Schema_copy"


def test_delete_clears_selection_of_deleted_schema(tmp_path: Path) -> None:
    repository = _repository(tmp_path)
    first = repository.create_schema("First")
    second = repository.create_schema("Second")

    repository.select(first.id)
    repository.delete(second.id)
    assert repository.selected_id == first.id

    repository.delete(first.id)
    assert repository.selected is None
    assert repository.schemas == ()


def test_unknown_ids_raise_not_found(tmp_path: Path) -> None:
    repository = _repository(tmp_path)

    with pytest.raises(SchemaNotFoundError, match="Schema not found: nope"):
        repository.get("nope")
    with pytest.raises(SchemaNotFoundError):
        repository.select("nope")
    with pytest.raises(SchemaNotFoundError):
        repository.delete("nope")
    with pytest.raises(SchemaNotFoundError):
        repository.replace("nope", {})


def test_property_count(tmp_path: Path) -> None:
    repository = _repository(tmp_path)
    stored = repository.create_schema()
    repository.replace(stored.id, add_property(stored.schema, "a", "string"))
    bare = repository.add({"type": "string"})

    assert repository.property_count(stored.id) == 1
    assert repository.property_count(bare.id) == 0


def test_save_replaces_store_without_leaving_temporary_file(tmp_path: Path) -> None:
    repository = _repository(tmp_path)
    repository.create_schema("First")
    repository.create_schema("Second")

    assert [path.name for path in tmp_path.iterdir()] == ["schemas.json"]


def test_failed_save_keeps_previous_store(tmp_path: Path, monkeypatch) -> None:
    repository = _repository(tmp_path)
    repository.create_schema("First")
    previous = repository.store_path.read_text(encoding="utf-8")

    def fail_replace(self: Path, target: Path) -> Path:
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", fail_replace)

    with pytest.raises(SchemaStorageError, match="disk full"):
        repository.create_schema("Second")
    assert repository.store_path.read_text(encoding="utf-8") == previous
    assert [path.name for path in tmp_path.iterdir()] == ["schemas.json"]
