"""
Typer-based CLI for kvform.

Commands:
- schemas: list the available schemas, or the fields of one schema
- plan:    print the store mutations a form submission would produce
- apply:   plan a form submission and apply it to a JSON settings store
- show:    display the stored values of a schema's fields
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from kvform.core.form import form_from_dict
from kvform.core.schema import (
    Entry,
    Record,
    Schema,
    Schemas,
    Secret,
    build_default_schemas,
    load_schemas,
)
from kvform.core.settings import (
    SettingsStore,
    build_update,
    format_value,
    list_entry_ids,
    list_ids,
    load_settings,
    plan_to_json,
    save_settings,
)
from kvform.core.utils.config import get_config, load_config
from kvform.core.utils.logger import log_info, setup_logging
from kvform.utils.error_handling import (
    KvformError,
    StoreConflictError,
    categorize_error,
    get_user_friendly_message,
    graceful_exit,
)

from .display_utils import (
    SECRET_MASK,
    console,
    plan_table,
    schema_fields_table,
    schemas_table,
    values_table,
)
from .exit_codes import CliExit

app = typer.Typer(
    name="kvform",
    help="Plan and inspect key-value settings updates from form data",
    no_args_is_help=True,
)


@app.callback()
def main(
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="JSON configuration file"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    config = load_config(str(config_file) if config_file else None)
    setup_logging(
        level=log_level or config.logging.level,
        log_file=config.logging.file,
        format_string=config.logging.format,
    )


def _load_schemas(schemas_file: Optional[Path]) -> Schemas:
    if schemas_file is None:
        return build_default_schemas()
    try:
        return load_schemas(schemas_file)
    except (KvformError, OSError, ValueError) as e:
        raise CliExit.config_error(get_user_friendly_message(e, categorize_error(e)))


def _get_schema(schema_id: str, schemas_file: Optional[Path]) -> Schema:
    schema = _load_schemas(schemas_file).get(schema_id)
    if schema is None:
        raise CliExit.error(f"Unknown schema: {schema_id}")
    return schema


def _read_form_payload(form_file: Path) -> Dict[str, Any]:
    try:
        payload = json.loads(form_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise CliExit.error(get_user_friendly_message(e, categorize_error(e)))
    if not isinstance(payload, dict):
        raise CliExit.error("Form data must be a JSON object")
    return payload


def _build_plan(schema: Schema, form_file: Path, update: bool):
    try:
        form = form_from_dict(schema, _read_form_payload(form_file), is_update=update)
    except KvformError as e:
        raise CliExit.error(get_user_friendly_message(e, categorize_error(e)))
    return build_update(form)


def _store_path(store: Optional[Path]) -> Path:
    return store if store is not None else Path(get_config().store.path)


def _load_store(path: Path) -> Dict[str, str]:
    try:
        return load_settings(path)
    except (OSError, ValueError) as e:
        raise CliExit.config_error(get_user_friendly_message(e, categorize_error(e)))


@app.command("schemas")
def schemas_command(
    schema_id: Optional[str] = typer.Argument(None, help="Show the fields of this schema"),
    schemas_file: Optional[Path] = typer.Option(None, "--schemas", help="JSON schema file"),
) -> None:
    """List schemas, or the fields of one schema."""
    with graceful_exit():
        if schema_id:
            console.print(schema_fields_table(_get_schema(schema_id, schemas_file)))
        else:
            console.print(schemas_table(_load_schemas(schemas_file)))


@app.command("plan")
def plan_command(
    schema_id: str = typer.Argument(..., help="Schema id"),
    form_file: Path = typer.Argument(..., help="JSON object of field values"),
    update: bool = typer.Option(False, "--update", help="Plan an update instead of a create"),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON"),
    schemas_file: Optional[Path] = typer.Option(None, "--schemas", help="JSON schema file"),
) -> None:
    """Print the store mutations for a form submission."""
    with graceful_exit():
        plan = _build_plan(_get_schema(schema_id, schemas_file), form_file, update)
        if as_json or get_config().output.format == "json":
            typer.echo(plan_to_json(plan, indent=2))
        else:
            console.print(plan_table(plan))


@app.command("apply")
def apply_command(
    schema_id: str = typer.Argument(..., help="Schema id"),
    form_file: Path = typer.Argument(..., help="JSON object of field values"),
    store: Optional[Path] = typer.Option(None, "--store", help="JSON settings store"),
    update: bool = typer.Option(False, "--update", help="Apply as an update instead of a create"),
    schemas_file: Optional[Path] = typer.Option(None, "--schemas", help="JSON schema file"),
) -> None:
    """Plan a form submission and apply it to the settings store."""
    with graceful_exit():
        plan = _build_plan(_get_schema(schema_id, schemas_file), form_file, update)
        path = _store_path(store)
        settings_store = SettingsStore(_load_store(path))
        try:
            settings_store.apply(plan)
        except StoreConflictError as e:
            raise CliExit.error(get_user_friendly_message(e, categorize_error(e)))
        save_settings(settings_store.settings, path)
        log_info("cli", f"Applied {len(plan)} operation(s)", str(path))
        typer.echo(f"Applied {len(plan)} operation(s) to {path}")


def _display(field, settings, key: str) -> str:
    value = format_value(settings, field, key)
    if value and isinstance(field.typ, Secret) and get_config().output.mask_secrets:
        return SECRET_MASK
    return value


@app.command("show")
def show_command(
    schema_id: str = typer.Argument(..., help="Schema id"),
    entity_id: Optional[str] = typer.Option(None, "--id", help="Record id to display"),
    store: Optional[Path] = typer.Option(None, "--store", help="JSON settings store"),
    schemas_file: Optional[Path] = typer.Option(None, "--schemas", help="JSON schema file"),
) -> None:
    """Display the stored values of a schema."""
    with graceful_exit():
        schema = _get_schema(schema_id, schemas_file)
        settings = _load_store(_store_path(store))
        shape = schema.typ

        if isinstance(shape, Entry):
            rows = [
                (entry_id, "", settings.get(f"{shape.prefix}.{entry_id}", ""))
                for entry_id in list_entry_ids(settings, shape.prefix)
            ]
            console.print(values_table(schema.id, rows))
            return

        if isinstance(shape, Record) and entity_id is None:
            for record_id in list_ids(settings, shape.prefix):
                typer.echo(record_id)
            return

        base = f"{shape.prefix}.{entity_id}." if isinstance(shape, Record) else ""
        rows = [
            (field.id, field.label, _display(field, settings, base + field.id))
            for field in schema.fields.values()
        ]
        title = f"{schema.id} {entity_id}" if entity_id else schema.id
        console.print(values_table(title, rows))


if __name__ == "__main__":
    app()
