"""Update planning, store reading and the reference settings store."""

from .operations import (
    Clear,
    Delete,
    Insert,
    UpdateSettings,
    plan_from_json,
    plan_to_json,
    update_from_dict,
)
from .planner import build_update, flatten_values, plan
from .reader import (
    Settings,
    array_values,
    form_from_settings,
    format_value,
    list_entry_ids,
    list_ids,
    read_form_value,
)
from .store import SettingsStore
from .persistence import (
    SETTINGS_SCHEMA_VERSION,
    load_settings,
    save_settings,
)

__all__ = [
    "Clear",
    "Delete",
    "Insert",
    "SETTINGS_SCHEMA_VERSION",
    "Settings",
    "SettingsStore",
    "UpdateSettings",
    "array_values",
    "build_update",
    "flatten_values",
    "form_from_settings",
    "format_value",
    "list_entry_ids",
    "list_ids",
    "load_settings",
    "plan",
    "plan_from_json",
    "plan_to_json",
    "read_form_value",
    "save_settings",
    "update_from_dict",
]
