"""Schema descriptors: storage shapes, fields and field types."""

from .types import (
    CONTROL_FIELD_MARKER,
    ID_FIELD,
    VALUE_FIELD,
    Array,
    Duration,
    DynamicSource,
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
    is_control_field,
)
from .loader import field_from_dict, load_schemas, schema_from_dict, schemas_from_dicts
from .defaults import build_default_schemas

__all__ = [
    "CONTROL_FIELD_MARKER",
    "ID_FIELD",
    "VALUE_FIELD",
    "Array",
    "Duration",
    "DynamicSource",
    "Entry",
    "Expression",
    "Field",
    "Input",
    "List",
    "Rate",
    "Record",
    "Schema",
    "SchemaType",
    "Schemas",
    "Secret",
    "Select",
    "Source",
    "StaticSource",
    "Type",
    "build_default_schemas",
    "field_from_dict",
    "is_control_field",
    "load_schemas",
    "schema_from_dict",
    "schemas_from_dicts",
]
