"""Rich rendering helpers for the kvform CLI."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from rich.console import Console
from rich.table import Table

from kvform.core.schema import Schema, Schemas
from kvform.core.settings import Clear, Delete, Insert, UpdateSettings

console = Console()

SECRET_MASK = "********"


def schemas_table(schemas: Schemas) -> Table:
    table = Table(title="Schemas")
    table.add_column("Id", style="cyan")
    table.add_column("Shape")
    table.add_column("Prefix")
    table.add_column("Fields", justify="right")
    for schema in schemas:
        prefix = getattr(schema.typ, "prefix", "")
        table.add_row(schema.id, schema.shape_name(), prefix, str(len(schema.fields)))
    return table


def plan_table(plan: List[UpdateSettings]) -> Table:
    table = Table(title="Update plan")
    table.add_column("#", justify="right")
    table.add_column("Operation", style="bold")
    table.add_column("Target")
    table.add_column("Value")
    for position, update in enumerate(plan, start=1):
        if isinstance(update, Delete):
            table.add_row(str(position), "delete", ", ".join(update.keys), "")
        elif isinstance(update, Clear):
            table.add_row(str(position), "clear", f"{update.prefix}*", "")
        elif isinstance(update, Insert):
            label = "insert (must not exist)" if update.assert_empty else "insert"
            for key, value in update.items():
                table.add_row(str(position), label, key, value)
    return table


def values_table(title: str, rows: Iterable[Tuple[str, str, str]]) -> Table:
    table = Table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Label")
    table.add_column("Value")
    for row in rows:
        table.add_row(*row)
    return table


def schema_fields_table(schema: Schema) -> Table:
    table = Table(title=f"Fields of {schema.id}")
    table.add_column("Field", style="cyan")
    table.add_column("Type")
    table.add_column("Multivalue")
    table.add_column("Default")
    for field in schema.fields.values():
        table.add_row(
            field.id,
            type(field.typ).__name__.lower(),
            "yes" if field.is_multivalue() else "no",
            field.default or "",
        )
    return table
