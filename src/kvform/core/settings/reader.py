"""Read field values back out of a flat settings store."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Mapping, Optional, Tuple

from kvform.core.form.values import Array, Expression, FormData, IfThen, Value
from kvform.core.schema import Array as ArrayType
from kvform.core.schema import Expression as ExpressionType
from kvform.core.schema import (
    ID_FIELD,
    VALUE_FIELD,
    Entry,
    Field,
    Record,
    Schema,
    Select,
    StaticSource,
    is_control_field,
)

Settings = Mapping[str, str]


def array_values(settings: Settings, key: str) -> List[Tuple[str, str]]:
    """
    Return every entry stored at ``key`` or below ``key.``, sorted by key.

    Index segments are zero-padded to a uniform width, so key order is
    element order.
    """
    prefix = f"{key}."
    results = [
        (entry_key, value)
        for entry_key, value in settings.items()
        if entry_key == key or entry_key.startswith(prefix)
    ]
    results.sort(key=lambda item: item[0])
    return results


def format_value(settings: Settings, field: Field, key: Optional[str] = None) -> str:
    """
    Display string for ``field``; ``key`` overrides the lookup key (Record entities).

    Never fails: missing data yields "" and unmapped select values are
    returned verbatim.
    """
    key = key or field.id
    typ = field.typ
    if isinstance(typ, Select) and isinstance(typ.source, StaticSource) and not typ.multi:
        value = settings.get(key, "")
        label = typ.source.label_for(value)
        return label if label is not None else value
    if isinstance(typ, ArrayType):
        values = array_values(settings, key)
        return values[0][1] if values else ""
    return settings.get(key, "")


def list_ids(settings: Settings, prefix: str) -> List[str]:
    """Ids of the Record entities stored under ``prefix`` (first segment only)."""
    head = f"{prefix}."
    ids = {key[len(head):].split(".", 1)[0] for key in settings if key.startswith(head)}
    return sorted(ids)


def list_entry_ids(settings: Settings, prefix: str) -> List[str]:
    """Ids of the Entry keys stored under ``prefix``; ids may contain dots."""
    head = f"{prefix}."
    return sorted(key[len(head):] for key in settings if key.startswith(head))


def _expression_from_entries(key: str, entries: List[Tuple[str, str]]) -> Expression:
    if len(entries) == 1 and entries[0][0] == key:
        return Expression(if_thens=[], else_=entries[0][1])
    parts: Dict[str, Dict[str, str]] = defaultdict(dict)
    else_ = ""
    head = f"{key}."
    for entry_key, value in entries:
        if not entry_key.startswith(head):
            continue
        index, _, part = entry_key[len(head):].partition(".")
        if part == "else":
            else_ = value
        elif part in ("if", "then"):
            parts[index][part] = value
    if_thens = [
        IfThen(if_=parts[index].get("if", ""), then_=parts[index].get("then", ""))
        for index in sorted(parts)
    ]
    return Expression(if_thens=if_thens, else_=else_)


def read_form_value(settings: Settings, field: Field, key: str):
    typ = field.typ
    if isinstance(typ, ArrayType) or (isinstance(typ, Select) and typ.multi):
        return Array([value for _, value in array_values(settings, key)])
    if isinstance(typ, ExpressionType):
        return _expression_from_entries(key, array_values(settings, key))
    return Value(settings.get(key, ""))


def form_from_settings(
    settings: Settings, schema: Schema, entity_id: Optional[str] = None
) -> FormData:
    """
    Rebuild the edit form of an existing entity from the store.

    The returned FormData has ``is_update`` set, so planning it again yields
    a plan that rewrites the same keys.
    """
    form = FormData(schema=schema, is_update=True)
    shape = schema.typ
    if isinstance(shape, Entry):
        form.set(ID_FIELD, entity_id or "")
        form.set(VALUE_FIELD, settings.get(f"{shape.prefix}.{entity_id}", ""))
        return form

    base = ""
    if isinstance(shape, Record):
        form.set(ID_FIELD, entity_id or "")
        base = f"{shape.prefix}.{entity_id}."

    for field in schema.fields.values():
        if is_control_field(field.id):
            continue
        form.set(field.id, read_form_value(settings, field, base + field.id))
    return form
