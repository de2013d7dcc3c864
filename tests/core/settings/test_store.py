"""
Tests for the reference settings store executor.
"""

import pytest

from kvform.core.form import Array, FormData
from kvform.core.settings import Clear, Delete, Insert, SettingsStore, build_update
from kvform.utils.error_handling import StoreConflictError


def test_apply_runs_operations_in_order():
    store = SettingsStore({"a.0": "x", "a.1": "y", "b": "z"})

    store.apply(
        [
            Clear(prefix="a."),
            Delete(keys=["b", "missing"]),
            Insert(prefix=None, values=[("a", "single")]),
        ]
    )

    assert store.settings == {"a": "single"}


def test_prefixed_insert_joins_keys():
    store = SettingsStore()

    store.apply([Insert(prefix="server.listener.smtp", values=[("bind", "x")])])

    assert store.get("server.listener.smtp.bind") == "x"


def test_assert_empty_rejects_existing_entry_key(entry_schema):
    store = SettingsStore({"store.mystore": "/old"})
    form = FormData(entry_schema).set("_id", "mystore").set("_value", "/var/mail")

    with pytest.raises(StoreConflictError) as excinfo:
        store.apply(build_update(form))

    assert excinfo.value.keys == ["store.mystore"]
    assert store.settings == {"store.mystore": "/old"}


def test_assert_empty_rejects_existing_record_subtree(record_schema):
    store = SettingsStore({"server.listener.smtp.protocol": "smtp"})
    form = FormData(record_schema).set("_id", "smtp").set("bind", Array(["x"]))

    with pytest.raises(StoreConflictError):
        store.apply(build_update(form))


def test_record_subtree_check_does_not_match_sibling_ids(record_schema):
    store = SettingsStore({"server.listener.smtps.protocol": "smtp"})
    form = FormData(record_schema).set("_id", "smtp").set("protocol", "smtp")

    store.apply(build_update(form))

    assert store.get("server.listener.smtp.protocol") == "smtp"
    assert store.get("server.listener.smtps.protocol") == "smtp"


def test_failed_plan_leaves_store_unchanged():
    store = SettingsStore({"k": "v", "other": "1"})

    with pytest.raises(StoreConflictError):
        store.apply(
            [
                Delete(keys=["other"]),
                Insert(prefix=None, values=[("k", "new")], assert_empty=True),
            ]
        )

    assert store.settings == {"k": "v", "other": "1"}


def test_record_update_replaces_shrunk_array(record_schema):
    store = SettingsStore()
    create = FormData(record_schema).set("_id", "smtp").set("bind", Array(["a", "b", "c"]))
    store.apply(build_update(create))

    update = FormData(record_schema, is_update=True)
    update.set("_id", "smtp").set("bind", Array(["only"]))
    store.apply(build_update(update))

    assert store.settings == {"server.listener.smtp.bind": "only"}


def test_list_update_removes_emptied_fields(list_schema):
    store = SettingsStore(
        {
            "server.hostname": "mx",
            "server.secret": "s3cret",
            "server.bind.0": "a",
            "server.bind.1": "b",
            "unrelated": "keep",
        }
    )
    update = FormData(list_schema, is_update=True).set("server.hostname", "mx2")

    store.apply(build_update(update))

    assert store.settings == {"server.hostname": "mx2", "unrelated": "keep"}


def test_direct_mutators():
    store = SettingsStore()
    store.set("a.b", "1")
    store.set("a.c", "2")
    store.set("d", "3")

    store.clear_prefix("a.")
    store.delete(["d"])

    assert len(store) == 0
    assert "d" not in store
