"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from openpyxl import load_workbook
from schema_editor.cli import cli
from schema_editor.field_report import FIELDS_SHEET_NAME


def _write_config(tmp_path: Path) -> Path:
    path = tmp_path / "schema-editor.yaml"
    path.write_text(
        "storage:\n  path: store/schemas.json\nexport:\n  directory: exports\n",
        encoding="utf-8",
    )
    return path


def _invoke(runner: CliRunner, config_path: Path, *args: str):
    return runner.invoke(cli, ["--config", str(config_path), *args])


def _create_schema(runner: CliRunner, config_path: Path, title: str = "Customer") -> str:
    result = _invoke(runner, config_path, "new", "--title", title)
    assert result.exit_code == 0, result.output
    return result.output.strip()


def _stored_documents(tmp_path: Path) -> list[dict]:
    return json.loads((tmp_path / "store" / "schemas.json").read_text(encoding="utf-8"))


def test_new_and_list_commands(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    schema_id = _create_schema(runner, config_path)

    result = _invoke(runner, config_path, "list")

    assert result.exit_code == 0
    assert result.output == f"{schema_id}\tCustomer\t0 properties\n"
    assert _stored_documents(tmp_path)[0]["id"] == schema_id


def test_property_editing_and_show_tree(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    schema_id = _create_schema(runner, config_path)

    commands = [
        ("add-property", schema_id, "id", "--type", "integer", "--required"),
        ("add-property", schema_id, "address", "--type", "object"),
        ("add-property", schema_id, "city", "--type", "string", "--parent", "address"),
        ("add-property", schema_id, "orders", "--type", "array"),
        ("add-property", schema_id, "tmp", "--type", "boolean", "--required"),
        ("remove-property", schema_id, "tmp"),
    ]
    for command in commands:
        result = _invoke(runner, config_path, *command)
        assert result.exit_code == 0, result.output

    show = _invoke(runner, config_path, "show", schema_id)

    assert show.exit_code == 0
    assert show.output.splitlines() == [
        "Customer",
        "  id: number",
        "  address: object",
        "    city: string",
        "  orders: array",
    ]
    stored = _stored_documents(tmp_path)[0]
    assert stored["required"] == ["id"]
    assert stored["properties"]["address"]["properties"] == {"city": {"type": "string"}}


def test_add_property_with_unknown_parent_fails(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    schema_id = _create_schema(runner, config_path)

    result = _invoke(
        runner, config_path, "add-property", schema_id, "x", "--type", "string", "--parent", "nope"
    )

    assert result.exit_code != 0
    assert "does not exist in schema" in str(result.exception)


def test_duplicate_and_delete_commands(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    schema_id = _create_schema(runner, config_path)

    duplicate = _invoke(runner, config_path, "duplicate", schema_id)
    duplicate_id = duplicate.output.strip()
    delete = _invoke(runner, config_path, "delete", schema_id)

    assert duplicate.exit_code == 0
    assert delete.exit_code == 0
    documents = _stored_documents(tmp_path)
    assert [document["id"] for document in documents] == [duplicate_id]
    assert documents[0]["title"] == "Customer_copy"


def test_export_then_import_round_trip(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    schema_id = _create_schema(runner, config_path)
    _invoke(runner, config_path, "add-property", schema_id, "name", "--type", "string")

    export = _invoke(runner, config_path, "export", schema_id)

    assert export.exit_code == 0
    exported_path = Path(export.output.strip())
    assert exported_path == (tmp_path / "exports" / "customer.schema.json").resolve()
    exported = json.loads(exported_path.read_text(encoding="utf-8"))
    assert "id" not in exported
    assert exported["properties"] == {"name": {"type": "string"}}

    imported = _invoke(runner, config_path, "import", str(exported_path))

    assert imported.exit_code == 0
    documents = _stored_documents(tmp_path)
    assert len(documents) == 2
    assert documents[1]["id"] == imported.output.strip()
    assert documents[1]["properties"] == exported["properties"]


def test_export_of_path_like_title_stays_in_export_directory(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    source = tmp_path / "hostile.json"
    source.write_text(json.dumps({"title": "../../escaped", "type": "object"}), encoding="utf-8")
    schema_id = _invoke(runner, config_path, "import", str(source)).output.strip()

    export = _invoke(runner, config_path, "export", schema_id)

    assert export.exit_code == 0, export.output
    exported_path = Path(export.output.strip())
    assert exported_path.parent == (tmp_path / "exports").resolve()
    assert not (tmp_path.parent / "escaped.schema.json").exists()


def test_import_of_invalid_file_reports_error_and_keeps_store(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    _create_schema(runner, config_path)
    bad_file = tmp_path / "bad.json"
    bad_file.write_text("{not json", encoding="utf-8")

    result = _invoke(runner, config_path, "import", str(bad_file))

    assert result.exit_code != 0
    assert "Failed to import: invalid file" in str(result.exception)
    assert len(_stored_documents(tmp_path)) == 1


def test_import_assigns_fallback_title(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    source = tmp_path / "untitled.json"
    source.write_text(json.dumps({"type": "object", "properties": {}}), encoding="utf-8")

    result = _invoke(runner, config_path, "import", str(source))

    assert result.exit_code == 0
    assert _stored_documents(tmp_path)[0]["title"] == "ImportedSchema"


def test_export_fields_writes_workbook(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    schema_id = _create_schema(runner, config_path)
    _invoke(runner, config_path, "add-property", schema_id, "name", "--type", "string")
    output_path = tmp_path / "fields.xlsx"

    result = _invoke(runner, config_path, "export-fields", schema_id, "--output", str(output_path))

    assert result.exit_code == 0
    sheet = load_workbook(output_path)[FIELDS_SHEET_NAME]
    assert sheet.cell(row=2, column=1).value == "name"


def test_generate_config_command_writes_file_with_default_name(tmp_path: Path) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=str(tmp_path)):
        result = runner.invoke(cli, ["generate-config"])
        output_path = Path("schema-editor.yaml").resolve()

        assert result.exit_code == 0
        assert output_path.exists()
        content = output_path.read_text(encoding="utf-8")
        assert "storage:" in content
        assert "export:" in content
        assert "logging:" in content
        assert str(output_path) in result.output


def test_commands_use_default_configuration_in_working_directory(tmp_path: Path) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=str(tmp_path)):
        created = runner.invoke(cli, ["new"])
        listed = runner.invoke(cli, ["list"])

        assert created.exit_code == 0
        assert Path("schemas.json").exists()
        assert "NewSchema" in listed.output
