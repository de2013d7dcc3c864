import json

import pytest

from kvform.core.schema import (
    Array,
    DynamicSource,
    Entry,
    Input,
    List,
    Record,
    Select,
    StaticSource,
    load_schemas,
    schema_from_dict,
)
from kvform.utils.error_handling import SchemaDefinitionError


def test_record_schema_from_dict():
    schema = schema_from_dict(
        {
            "id": "listener",
            "type": {"kind": "record", "prefix": "server.listener"},
            "fields": [
                {"id": "protocol", "type": {"kind": "select", "source": [["smtp", "SMTP"]]}},
                {"id": "bind", "type": "array", "label": "Bind"},
                {"id": "hostname"},
            ],
        }
    )

    assert schema.typ == Record(prefix="server.listener")
    assert schema.field("protocol").typ == Select(source=StaticSource((("smtp", "SMTP"),)))
    assert schema.field("bind").typ == Array()
    assert schema.field("bind").label == "Bind"
    assert schema.field("hostname").typ == Input()


def test_list_and_dynamic_source():
    schema = schema_from_dict(
        {
            "id": "auth",
            "type": "list",
            "fields": [
                {
                    "id": "storage.directory",
                    "type": {
                        "kind": "select",
                        "source": {"schema": "directory", "field": "type"},
                    },
                    "default": 3,
                }
            ],
        }
    )

    assert schema.typ == List()
    field = schema.field("storage.directory")
    assert field.typ.source == DynamicSource(schema="directory", field="type")
    assert field.default == "3"


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "list"},
        {"id": "s", "type": {"kind": "entry"}},
        {"id": "s", "type": "tree"},
        {"id": "s", "type": "list", "fields": [{"id": "f", "type": "color"}]},
        {"id": "s", "type": "list", "fields": [{"type": "input"}]},
        {"id": "s", "type": "list", "fields": [{"id": "f"}, {"id": "f"}]},
        {"id": "s", "type": "list", "fields": [{"id": "f", "type": {"kind": "select"}}]},
    ],
)
def test_malformed_descriptors_raise(payload):
    with pytest.raises(SchemaDefinitionError):
        schema_from_dict(payload)


def test_error_names_offending_field():
    with pytest.raises(SchemaDefinitionError) as excinfo:
        schema_from_dict({"id": "s", "type": "list", "fields": [{"id": "f", "type": "color"}]})

    assert excinfo.value.where == "s.f"


def test_load_schemas_file(tmp_path):
    path = tmp_path / "schemas.json"
    path.write_text(
        json.dumps(
            [
                {"id": "store", "type": {"kind": "entry", "prefix": "store"}},
                {"id": "oauth", "type": "list"},
            ]
        ),
        encoding="utf-8",
    )

    schemas = load_schemas(path)

    assert schemas.get("store").typ == Entry(prefix="store")
    assert [schema.id for schema in schemas] == ["store", "oauth"]
