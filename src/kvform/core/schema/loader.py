"""Decode declarative schema descriptors (dicts or JSON) into Schema objects."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Union

from kvform.utils.error_handling import SchemaDefinitionError

from .types import (
    Array,
    DynamicSource,
    Duration,
    Entry,
    Expression,
    Field,
    Input,
    List,
    Rate,
    Record,
    Schema,
    Schemas,
    SchemaType,
    Secret,
    Select,
    Source,
    StaticSource,
    Type,
)

_SIMPLE_TYPES = {
    "input": Input,
    "secret": Secret,
    "duration": Duration,
    "rate": Rate,
    "array": Array,
    "expression": Expression,
}


def _shape_from_dict(schema_id: str, payload: Any) -> SchemaType:
    if isinstance(payload, str):
        payload = {"kind": payload}
    if not isinstance(payload, dict):
        raise SchemaDefinitionError(schema_id, "schema type must be a string or object")
    kind = str(payload.get("kind", "")).lower()
    if kind == "list":
        return List()
    if kind in ("record", "entry"):
        prefix = payload.get("prefix")
        if not prefix or not isinstance(prefix, str):
            raise SchemaDefinitionError(schema_id, f"{kind} schemas require a prefix")
        return Record(prefix) if kind == "record" else Entry(prefix)
    raise SchemaDefinitionError(schema_id, f"unknown schema kind {kind!r}")


def _source_from_dict(where: str, payload: Any) -> Source:
    if isinstance(payload, list):
        return StaticSource(tuple((str(k), str(v)) for k, v in payload))
    if isinstance(payload, dict):
        if "items" in payload:
            return StaticSource(tuple((str(k), str(v)) for k, v in payload["items"]))
        if "schema" in payload and "field" in payload:
            return DynamicSource(
                schema=str(payload["schema"]),
                field=str(payload["field"]),
                filter=tuple(str(item) for item in payload.get("filter", ())),
            )
    raise SchemaDefinitionError(where, "select source must be a list of pairs or a schema reference")


def _type_from_dict(where: str, payload: Any) -> Type:
    if payload is None:
        return Input()
    if isinstance(payload, str):
        payload = {"kind": payload}
    if not isinstance(payload, dict):
        raise SchemaDefinitionError(where, "field type must be a string or object")
    kind = str(payload.get("kind", "")).lower()
    if kind in _SIMPLE_TYPES:
        return _SIMPLE_TYPES[kind]()
    if kind == "select":
        return Select(
            source=_source_from_dict(where, payload.get("source")),
            multi=bool(payload.get("multi", False)),
        )
    raise SchemaDefinitionError(where, f"unknown field type {kind!r}")


def field_from_dict(schema_id: str, payload: Dict[str, Any]) -> Field:
    field_id = payload.get("id")
    if not field_id or not isinstance(field_id, str):
        raise SchemaDefinitionError(schema_id, "every field needs a string id")
    where = f"{schema_id}.{field_id}"
    default = payload.get("default")
    return Field(
        id=field_id,
        typ=_type_from_dict(where, payload.get("type")),
        label=str(payload.get("label", "")),
        help=str(payload.get("help", "")),
        default=None if default is None else str(default),
    )


def schema_from_dict(payload: Dict[str, Any]) -> Schema:
    """
    Build a Schema from its declarative form.

    Example:
        {"id": "store", "type": {"kind": "entry", "prefix": "store"},
         "fields": [{"id": "_value", "type": "input"}]}
    """
    schema_id = payload.get("id")
    if not schema_id or not isinstance(schema_id, str):
        raise SchemaDefinitionError("<schema>", "schema id is required")
    schema = Schema(id=schema_id, typ=_shape_from_dict(schema_id, payload.get("type")))
    for field_payload in payload.get("fields", []):
        if not isinstance(field_payload, dict):
            raise SchemaDefinitionError(schema_id, "fields must be objects")
        field = field_from_dict(schema_id, field_payload)
        if field.id in schema.fields:
            raise SchemaDefinitionError(f"{schema_id}.{field.id}", "duplicate field id")
        schema.add_field(field)
    return schema


def schemas_from_dicts(payloads: Iterable[Dict[str, Any]]) -> Schemas:
    schemas = Schemas()
    for payload in payloads:
        schemas.add(schema_from_dict(payload))
    return schemas


def load_schemas(path: Union[str, Path]) -> Schemas:
    """Load a JSON file holding a schema object or a list of them."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = [payload]
    return schemas_from_dicts(payload)
