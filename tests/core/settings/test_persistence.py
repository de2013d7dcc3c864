import json

import pytest

from kvform.core.settings import (
    SETTINGS_SCHEMA_VERSION,
    load_settings,
    save_settings,
)


def test_save_load_settings(tmp_path):
    path = tmp_path / "conf" / "settings.json"
    settings = {"store.b": "/b", "store.a": "/a"}

    save_settings(settings, path)

    assert load_settings(path) == settings
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["schema_version"] == SETTINGS_SCHEMA_VERSION
    assert list(payload["settings"]) == ["store.a", "store.b"]
    assert not path.with_suffix(".tmp").exists()


def test_missing_file_is_empty_store(tmp_path):
    assert load_settings(tmp_path / "nope.json") == {}


def test_unwrapped_object_is_accepted(tmp_path):
    path = tmp_path / "plain.json"
    path.write_text('{"a": "1", "b": 2}', encoding="utf-8")

    assert load_settings(path) == {"a": "1", "b": "2"}


@pytest.mark.parametrize("content", ['["store.a", "/a"]', '"store.a"', "{not json"])
def test_unreadable_store_raises(tmp_path, content):
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        load_settings(path)
    assert path.read_text(encoding="utf-8") == content
