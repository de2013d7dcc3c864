"""Coerce raw host input into edited form values."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from kvform.core.schema import Array as ArrayType
from kvform.core.schema import Expression as ExpressionType
from kvform.core.schema import Field, Schema, Select, is_control_field
from kvform.core.utils.logger import log_warning
from kvform.utils.error_handling import FormInputError

from .values import Array, Expression, FormData, FormValue, IfThen, Value


def _scalar_to_str(field_id: str, raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (str, int, float)):
        return str(raw)
    raise FormInputError(field_id, f"expected a scalar, got {type(raw).__name__}")


def _coerce_list(field_id: str, raw: Any) -> Array:
    if raw is None:
        return Array([])
    if isinstance(raw, (list, tuple)):
        return Array([_scalar_to_str(field_id, item) for item in raw])
    if isinstance(raw, str):
        trimmed = raw.strip()
        try:
            parsed = json.loads(trimmed)
            if isinstance(parsed, list):
                return Array([_scalar_to_str(field_id, item) for item in parsed])
        except json.JSONDecodeError:
            pass
        if trimmed:
            return Array([item.strip() for item in trimmed.split(",") if item.strip()])
        return Array([])
    return Array([_scalar_to_str(field_id, raw)])


def _coerce_if_then(field_id: str, raw: Any) -> IfThen:
    if isinstance(raw, dict):
        return IfThen(
            if_=_scalar_to_str(field_id, raw.get("if")),
            then_=_scalar_to_str(field_id, raw.get("then")),
        )
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return IfThen(if_=_scalar_to_str(field_id, raw[0]), then_=_scalar_to_str(field_id, raw[1]))
    raise FormInputError(field_id, "if/then entries must be objects or pairs")


def _coerce_expression(field_id: str, raw: Any) -> Expression:
    if isinstance(raw, dict):
        if_thens = raw.get("if_thens") or []
        if not isinstance(if_thens, list):
            raise FormInputError(field_id, "if_thens must be a list")
        return Expression(
            if_thens=[_coerce_if_then(field_id, item) for item in if_thens],
            else_=_scalar_to_str(field_id, raw.get("else")),
        )
    return Expression(if_thens=[], else_=_scalar_to_str(field_id, raw))


def coerce_value(raw: Any, field: Optional[Field], field_id: str = "") -> FormValue:
    """Coerce a raw value to the edited value variant its field type expects."""
    if isinstance(raw, (Value, Array, Expression)):
        return raw
    field_id = field.id if field is not None else field_id
    if field is None:
        return Value(_scalar_to_str(field_id, raw))
    typ = field.typ
    if isinstance(typ, ArrayType) or (isinstance(typ, Select) and typ.multi):
        return _coerce_list(field_id, raw)
    if isinstance(typ, ExpressionType):
        return _coerce_expression(field_id, raw)
    return Value(_scalar_to_str(field_id, raw))


def form_from_dict(
    schema: Schema,
    payload: Dict[str, Any],
    is_update: bool = False,
    strict: bool = True,
) -> FormData:
    """
    Build FormData from a raw mapping of field id to value.

    Control fields pass through as scalars. Unknown fields raise
    FormInputError when ``strict``; otherwise they are dropped with a warning.
    """
    form = FormData(schema=schema, is_update=is_update)
    for field_id, raw in payload.items():
        if is_control_field(field_id):
            form.set(field_id, coerce_value(raw, schema.field(field_id), field_id))
            continue
        field = schema.field(field_id)
        if field is None:
            if strict:
                raise FormInputError(field_id, f"not a field of schema {schema.id!r}")
            log_warning("form", f"Dropping unknown field {field_id!r}", context=schema.id)
            continue
        form.set(field_id, coerce_value(raw, field))
    return form
