"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click
from openpyxl.utils.exceptions import IllegalCharacterError

from schema_editor.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    EditorConfiguration,
    default_configuration,
    load_configuration,
    log_level_number,
    write_placeholder_configuration,
)
from schema_editor.field_report import generate_field_workbook
from schema_editor.schema_management import (
    SCHEMA_TYPES,
    JsonSchema,
    SchemaEdit,
    SchemaMutationError,
    add_property,
    get_schema_type,
    iter_fields,
    remove_property,
    schema_to_fields,
    update_at_path,
)
from schema_editor.schema_repository import (
    SchemaImportError,
    SchemaNotFoundError,
    SchemaRepository,
    SchemaStorageError,
    read_imported_schema,
    write_schema_export,
)

LOGGER = logging.getLogger(__name__)

_REPOSITORY_ERRORS = (SchemaStorageError, SchemaNotFoundError, SchemaMutationError)


class CliError(Exception):
    """Custom CLI error."""


@dataclass
class _CliState:
    configuration: EditorConfiguration

    def open_repository(self) -> SchemaRepository:
        repository = SchemaRepository(self.configuration.storage.path)
        try:
            repository.load()
        except SchemaStorageError as exc:
            raise CliError(str(exc)) from exc
        return repository


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-editor")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the YAML editor configuration file (defaults to "
    f"./{DEFAULT_CONFIG_FILENAME} when present)",
)
@click.option(
    "--log-level",
    "log_level",
    required=False,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """Author, persist and exchange JSON Schema documents."""
    if ctx.resilient_parsing:
        return
    try:
        configuration = _resolve_configuration(config_path)
        level = log_level_number(log_level or configuration.logging.level)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("schema_editor").setLevel(level)
    ctx.obj = _CliState(configuration=configuration)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML editor configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate an editor configuration file with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="new")
@click.option("--title", default="NewSchema", show_default=True, help="Schema title")
@click.pass_obj
def new_schema(state: _CliState, title: str) -> None:
    """Create an empty object schema and print its id."""
    repository = state.open_repository()
    try:
        stored = repository.create_schema(title)
    except SchemaStorageError as exc:
        raise CliError(str(exc)) from exc
    click.echo(stored.id)


@cli.command(name="list")
@click.pass_obj
def list_schemas(state: _CliState) -> None:
    """List stored schemas with their property counts."""
    repository = state.open_repository()
    for stored in repository.schemas:
        count = repository.property_count(stored.id)
        click.echo(f"{stored.id}\t{stored.title or '(untitled)'}\t{count} properties")


@cli.command(name="show")
@click.argument("schema_id")
@click.pass_obj
def show_schema(state: _CliState, schema_id: str) -> None:
    """Print the field tree of a schema."""
    repository = state.open_repository()
    try:
        stored = repository.get(schema_id)
    except SchemaNotFoundError as exc:
        raise CliError(str(exc)) from exc
    click.echo(stored.title or "(untitled)")
    for depth, field in iter_fields(schema_to_fields(stored.schema)):
        click.echo(f"{'  ' * (depth + 1)}{field.name}: {get_schema_type(field.schema)}")


@cli.command(name="add-property")
@click.argument("schema_id")
@click.argument("name")
@click.option(
    "--type",
    "property_type",
    required=True,
    type=click.Choice(SCHEMA_TYPES),
    help="JSON Schema type of the new property",
)
@click.option("--description", required=False, help="Optional property description")
@click.option("--required", "is_required", is_flag=True, default=False, help="Mark as required")
@click.option(
    "--parent",
    "parent_path",
    default="",
    help="Field path of the object to extend, e.g. address or items[]",
)
@click.pass_obj
def add_property_command(
    state: _CliState,
    schema_id: str,
    name: str,
    property_type: str,
    description: str | None,
    is_required: bool,
    parent_path: str,
) -> None:
    """Add or replace a property on a schema."""

    def edit(node: JsonSchema) -> JsonSchema:
        return add_property(
            node, name, property_type, description=description, required=is_required
        )

    _apply_edit(state, schema_id, parent_path, edit)
    click.echo(_joined_path(parent_path, name))


@cli.command(name="remove-property")
@click.argument("schema_id")
@click.argument("name")
@click.option(
    "--parent",
    "parent_path",
    default="",
    help="Field path of the object that holds the property",
)
@click.pass_obj
def remove_property_command(
    state: _CliState, schema_id: str, name: str, parent_path: str
) -> None:
    """Remove a property from a schema."""
    _apply_edit(state, schema_id, parent_path, lambda node: remove_property(node, name))
    click.echo(_joined_path(parent_path, name))


@cli.command(name="duplicate")
@click.argument("schema_id")
@click.pass_obj
def duplicate_schema(state: _CliState, schema_id: str) -> None:
    """Copy a schema under a new id and print the new id."""
    repository = state.open_repository()
    try:
        stored = repository.duplicate(schema_id)
    except _REPOSITORY_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(stored.id)


@cli.command(name="delete")
@click.argument("schema_id")
@click.pass_obj
def delete_schema(state: _CliState, schema_id: str) -> None:
    """Delete a schema."""
    repository = state.open_repository()
    try:
        repository.delete(schema_id)
    except _REPOSITORY_ERRORS as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Schema deleted: {schema_id}")


@cli.command(name="export")
@click.argument("schema_id")
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory for the exported file (defaults to export.directory)",
)
@click.pass_obj
def export_schema(state: _CliState, schema_id: str, output_dir: str | None) -> None:
    """Export a schema as a JSON Schema file."""
    repository = state.open_repository()
    export_settings = state.configuration.export
    try:
        stored = repository.get(schema_id)
        destination = write_schema_export(
            stored,
            Path(output_dir) if output_dir else export_settings.directory,
            indent=export_settings.indent,
        )
    except (SchemaNotFoundError, OSError) as exc:
        raise CliError(str(exc)) from exc
    LOGGER.info("Exported schema %s to %s", schema_id, destination)
    click.echo(str(destination))


@cli.command(name="import")
@click.argument("input_path", type=click.Path(path_type=str))
@click.pass_obj
def import_schema(state: _CliState, input_path: str) -> None:
    """Import a JSON Schema file and print the new id."""
    repository = state.open_repository()
    try:
        schema = read_imported_schema(input_path)
        stored = repository.add(schema)
    except (SchemaImportError, SchemaStorageError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(stored.id)


@cli.command(name="export-fields")
@click.argument("schema_id")
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the field report workbook to write",
)
@click.pass_obj
def export_fields(state: _CliState, schema_id: str, output_path: str) -> None:
    """Write the field tree of a schema to an Excel workbook."""
    repository = state.open_repository()
    try:
        stored = repository.get(schema_id)
        destination = generate_field_workbook(
            stored.schema, schema_to_fields(stored.schema), output_path
        )
    except (SchemaNotFoundError, OSError, ValueError, IllegalCharacterError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination))


def _apply_edit(
    state: _CliState, schema_id: str, parent_path: str, edit: SchemaEdit
) -> None:
    repository = state.open_repository()
    try:
        repository.update(schema_id, lambda schema: update_at_path(schema, parent_path, edit))
    except _REPOSITORY_ERRORS as exc:
        raise CliError(str(exc)) from exc


def _joined_path(parent_path: str, name: str) -> str:
    return f"{parent_path}.{name}" if parent_path else name


def _resolve_configuration(config_path: str | None) -> EditorConfiguration:
    if config_path:
        return load_configuration(config_path)
    default_path = Path(DEFAULT_CONFIG_FILENAME)
    if default_path.exists():
        return load_configuration(default_path)
    return default_configuration(Path.cwd())


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
