"""
Top-level kvform configuration.

Loading order (highest to lowest priority):
1. Environment variables (``KVFORM_*``, a ``.env`` file is honored)
2. Configuration file (JSON), if provided
3. Default values
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field, fields
from logging import getLevelName
from typing import Any, Callable, Dict, Optional

try:
    from dotenv import load_dotenv as _load_dotenv
except Exception:  # pragma: no cover - optional dependency guard
    _load_dotenv = None

from kvform.core.utils.logger import log_warning

load_dotenv: Optional[Callable[..., bool]] = _load_dotenv

ENV_PREFIX = "KVFORM_"


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"expected a boolean, got {value!r}")


def _coerce_str(value: Any) -> str:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"expected a string, got {value!r}")


def _coerce_field(default: Any, value: Any) -> Any:
    """Coerce a file value to the type of the field's default."""
    if isinstance(default, bool):
        return _coerce_bool(value)
    if value is None and default is None:
        return None
    return _coerce_str(value)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _coerce_level(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        level = getLevelName(value)
    else:
        level = _coerce_str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown logging level {value!r}")
    return level


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: Optional[str] = None
    format: Optional[str] = None


@dataclass
class StoreConfig:
    # JSON file used by the CLI as the reference key-value store
    path: str = "settings.json"


@dataclass
class OutputConfig:
    # table | json
    format: str = "table"
    mask_secrets: bool = True


@dataclass
class KvformConfig:
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def load(cls, config_file: Optional[str] = None) -> "KvformConfig":
        config = cls()
        if config_file:
            config._load_from_file(config_file)
        config._load_from_env()
        return config

    def _load_from_file(self, config_file: str) -> None:
        with open(config_file, encoding="utf-8") as handle:
            payload = json.load(handle)
        self.update_from_dict(payload)

    def update_from_dict(self, payload: Dict[str, Any]) -> None:
        sections = {f.name for f in fields(self)}
        for section_name, values in payload.items():
            if section_name not in sections or not isinstance(values, dict):
                continue
            section = getattr(self, section_name)
            defaults = {f.name: f.default for f in fields(section)}
            for key, value in values.items():
                if key not in defaults:
                    continue
                try:
                    if (section_name, key) == ("logging", "level"):
                        coerced = _coerce_level(value)
                    else:
                        coerced = _coerce_field(defaults[key], value)
                except ValueError as e:
                    log_warning("config", f"Ignoring {section_name}.{key}", str(e))
                    continue
                setattr(section, key, coerced)

    def _load_from_env(self) -> None:
        """
        Supported environment variables:
        - KVFORM_LOG_LEVEL: Logging level
        - KVFORM_LOG_FILE: Log file path
        - KVFORM_STORE_PATH: JSON store used by the CLI
        - KVFORM_OUTPUT_FORMAT: table or json
        - KVFORM_MASK_SECRETS: 1/true/yes/on or 0/false/no/off
        """
        if load_dotenv is not None:
            load_dotenv(override=False)

        if os.getenv("KVFORM_LOG_LEVEL"):
            self.logging.level = os.getenv("KVFORM_LOG_LEVEL", "WARNING").upper()
        if os.getenv("KVFORM_LOG_FILE"):
            self.logging.file = os.getenv("KVFORM_LOG_FILE")
        if os.getenv("KVFORM_STORE_PATH"):
            self.store.path = os.getenv("KVFORM_STORE_PATH", self.store.path)
        if os.getenv("KVFORM_OUTPUT_FORMAT"):
            self.output.format = os.getenv("KVFORM_OUTPUT_FORMAT", "table").lower()
        mask = os.getenv("KVFORM_MASK_SECRETS")
        if mask:
            self.output.mask_secrets = mask.strip().lower() in {"1", "true", "yes", "on"}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_config: Optional[KvformConfig] = None


def load_config(config_file: Optional[str] = None) -> KvformConfig:
    """Load configuration and make it the global instance."""
    global _config
    _config = KvformConfig.load(config_file)
    return _config


def get_config() -> KvformConfig:
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    global _config
    _config = None
