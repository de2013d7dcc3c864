import json

from kvform.core.utils.config import KvformConfig, get_config, load_config


def test_defaults():
    config = KvformConfig()

    assert config.logging.level == "WARNING"
    assert config.store.path == "settings.json"
    assert config.output.mask_secrets is True


def test_file_then_env_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps(
            {
                "logging": {"level": "INFO"},
                "store": {"path": "from-file.json"},
                "unknown": {"x": 1},
            }
        )
    )
    monkeypatch.setenv("KVFORM_STORE_PATH", "from-env.json")
    monkeypatch.setenv("KVFORM_MASK_SECRETS", "off")

    config = KvformConfig.load(str(config_file))

    assert config.logging.level == "INFO"
    assert config.store.path == "from-env.json"
    assert config.output.mask_secrets is False


def test_global_config_is_cached():
    first = load_config()

    assert get_config() is first
    assert first.to_dict()["output"] == {"format": "table", "mask_secrets": True}


def test_file_values_are_coerced_to_field_types():
    config = KvformConfig()

    config.update_from_dict(
        {
            "logging": {"level": 10, "file": "kvform.log"},
            "store": {"path": 42},
            "output": {"mask_secrets": "false"},
        }
    )

    assert config.logging.level == "DEBUG"
    assert config.logging.file == "kvform.log"
    assert config.store.path == "42"
    assert config.output.mask_secrets is False


def test_invalid_file_values_keep_defaults():
    config = KvformConfig()

    config.update_from_dict(
        {
            "logging": {"level": "loud"},
            "output": {"mask_secrets": "maybe", "format": ["json"]},
            "load": {"x": 1},
        }
    )

    assert config.logging.level == "WARNING"
    assert config.output.mask_secrets is True
    assert config.output.format == "table"
