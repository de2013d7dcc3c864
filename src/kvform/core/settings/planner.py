"""
Turn edited form data into an ordered list of store mutations.

Keys are flat and dot separated. Arrays are stored under zero-padded index
segments so lexicographic key order matches element order:

    bind.0 = 0.0.0.0:25      (two elements, width of "1" is 1)
    bind.1 = [::]:25

A single-element array is stored under the bare field key. Expressions use
``{field}.{i}.if`` / ``{field}.{i}.then`` per pair and ``{field}.{n}.else``
for the fallback, where the pad width is the digit count of the pair count n.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from kvform.core.form.values import Array, Expression, FormData, FormValue, Value
from kvform.core.schema import (
    ID_FIELD,
    VALUE_FIELD,
    Entry,
    List as ListShape,
    Record,
    Schema,
    is_control_field,
)
from kvform.core.utils.logger import log_debug

from .operations import Clear, Delete, Insert, UpdateSettings


def _flatten_value(key: str, value: FormValue) -> List[Tuple[str, str]]:
    if isinstance(value, Value):
        return [(key, value.value)] if not value.is_empty() else []

    if isinstance(value, Array):
        if value.is_empty():
            return []
        total_values = len(value.values)
        if total_values == 1:
            return [(key, value.values[0])]
        pad_len = len(str(total_values - 1))
        return [
            (f"{key}.{idx:0>{pad_len}}", item) for idx, item in enumerate(value.values)
        ]

    if isinstance(value, Expression):
        if value.is_empty():
            return []
        if not value.if_thens:
            return [(key, value.else_)]
        # The fallback takes index n, so the width covers n rather than n - 1
        total_values = len(value.if_thens)
        pad_len = len(str(total_values))
        key_values: List[Tuple[str, str]] = []
        for idx, if_then in enumerate(value.if_thens):
            key_values.append((f"{key}.{idx:0>{pad_len}}.if", if_then.if_))
            key_values.append((f"{key}.{idx:0>{pad_len}}.then", if_then.then_))
        key_values.append((f"{key}.{total_values:0>{pad_len}}.else", value.else_))
        return key_values

    raise TypeError(f"Unsupported form value: {type(value).__name__}")


def flatten_values(values: Dict[str, FormValue]) -> List[Tuple[str, str]]:
    """Flatten edited values into key/value pairs, skipping control fields."""
    key_values: List[Tuple[str, str]] = []
    for key, value in values.items():
        if is_control_field(key):
            continue
        key_values.extend(_flatten_value(key, value))
    return key_values


def build_update(form: FormData) -> List[UpdateSettings]:
    """
    Plan the store mutations for one form submission.

    Clear and Delete operations always come before the single Insert. The
    identifier control field is expected to be set for Record and Entry
    schemas; it is not checked here.
    """
    updates: List[UpdateSettings] = []
    insert_prefix: Optional[str] = None
    assert_empty = False
    shape = form.schema.typ

    if isinstance(shape, Record):
        entity_id = form.value_as_str(ID_FIELD) or ""
        if form.is_update:
            updates.append(Clear(prefix=f"{shape.prefix}.{entity_id}."))
        else:
            assert_empty = True
        insert_prefix = f"{shape.prefix}.{entity_id}"

    elif isinstance(shape, Entry):
        entity_id = form.value_as_str(ID_FIELD) or ""
        updates.append(
            Insert(
                prefix=None,
                assert_empty=not form.is_update,
                values=[
                    (
                        f"{shape.prefix}.{entity_id}",
                        form.value_as_str(VALUE_FIELD) or "",
                    )
                ],
            )
        )
        _log_plan(form, updates)
        return updates

    elif isinstance(shape, ListShape):
        if form.is_update:
            delete_keys: List[str] = []
            for field in form.schema.fields.values():
                if field.is_multivalue():
                    updates.append(Clear(prefix=f"{field.id}."))
                    delete_keys.append(field.id)
                elif form.value_is_empty(field.id):
                    delete_keys.append(field.id)

            if delete_keys:
                updates.append(Delete(keys=delete_keys))

    else:
        raise TypeError(f"Unsupported schema type: {type(shape).__name__}")

    key_values = flatten_values(form.values)
    if key_values:
        updates.append(
            Insert(prefix=insert_prefix, values=key_values, assert_empty=assert_empty)
        )

    _log_plan(form, updates)
    return updates


def plan(
    schema: Schema, is_update: bool, values: Dict[str, FormValue]
) -> List[UpdateSettings]:
    """Functional form of :func:`build_update`."""
    return build_update(FormData(schema=schema, values=dict(values), is_update=is_update))


def _log_plan(form: FormData, updates: List[UpdateSettings]) -> None:
    log_debug(
        "planner",
        f"{len(updates)} operation(s) for schema {form.schema.id!r}",
        context="update" if form.is_update else "create",
    )
