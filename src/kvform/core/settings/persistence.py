"""JSON file persistence for the reference settings store."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union
import json

from kvform.core.utils.logger import log_file_operation

SETTINGS_SCHEMA_VERSION = 1


def _wrap_settings(settings: Dict[str, str]) -> Dict[str, Any]:
    return {"schema_version": SETTINGS_SCHEMA_VERSION, "settings": settings}


def _unwrap_settings(payload: Dict[str, Any]) -> Dict[str, str]:
    if "settings" in payload and isinstance(payload["settings"], dict):
        payload = payload["settings"]
    return {str(key): str(value) for key, value in payload.items()}


def save_settings(settings: Dict[str, str], target_path: Union[str, Path]) -> None:
    """Write settings atomically (temp file, then replace)."""
    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = target_path.with_suffix(".tmp")
    payload = _wrap_settings(dict(sorted(settings.items())))
    temp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    temp_path.replace(target_path)
    log_file_operation("write", str(target_path), True)


def load_settings(path: Union[str, Path]) -> Dict[str, str]:
    """
    Load settings; a missing file is an empty store.

    Raises:
        ValueError: The file is not valid JSON or does not hold a JSON object.
    """
    path = Path(path)
    if not path.exists():
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        log_file_operation("read", str(path), False, str(e))
        raise ValueError(f"{path} is not valid JSON") from e
    if not isinstance(payload, dict):
        log_file_operation("read", str(path), False, "expected a JSON object")
        raise ValueError(f"{path} must hold a JSON object")
    return _unwrap_settings(payload)
