import json

import pytest

from kvform.core.settings import (
    Clear,
    Delete,
    Insert,
    plan_from_json,
    plan_to_json,
    update_from_dict,
)


def test_insert_tagged_encoding():
    insert = Insert(prefix=None, values=[("store.mystore", "/var/mail")], assert_empty=True)

    assert insert.to_dict() == {
        "type": "Insert",
        "prefix": None,
        "values": [["store.mystore", "/var/mail"]],
        "assert_empty": True,
    }


def test_plan_json_roundtrip():
    plan = [
        Clear(prefix="server.bind."),
        Delete(keys=["server.bind"]),
        Insert(prefix="server.listener.smtp", values=[("bind", "x")]),
    ]

    text = plan_to_json(plan)

    assert json.loads(text)[0] == {"type": "Clear", "prefix": "server.bind."}
    assert plan_from_json(text) == plan


def test_unknown_tag_is_rejected():
    with pytest.raises(ValueError):
        update_from_dict({"type": "Rename"})


def test_plan_must_be_a_list():
    with pytest.raises(ValueError):
        plan_from_json('{"type": "Clear", "prefix": "a."}')


def test_insert_items_are_relative_to_prefix():
    insert = Insert(prefix="p.id", values=[("a", "1"), ("b.0", "2")])

    assert insert.items() == [("p.id.a", "1"), ("p.id.b.0", "2")]
