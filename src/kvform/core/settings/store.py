"""In-memory reference executor for update plans."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from kvform.core.utils.logger import log_debug, log_warning
from kvform.utils.error_handling import StoreConflictError

from .operations import Clear, Delete, Insert, UpdateSettings


class SettingsStore:
    """
    Flat key/value store that applies planner output.

    ``apply`` runs a plan in emitted order against a working copy and only
    commits when every operation succeeded, so a rejected plan leaves the
    store unchanged.
    """

    def __init__(self, settings: Optional[Mapping[str, str]] = None):
        self._settings: Dict[str, str] = dict(settings or {})

    @property
    def settings(self) -> Dict[str, str]:
        return dict(self._settings)

    def get(self, key: str) -> Optional[str]:
        return self._settings.get(key)

    def set(self, key: str, value: str) -> None:
        self._settings[key] = value

    def delete(self, keys: Iterable[str]) -> None:
        _delete(self._settings, keys)

    def clear_prefix(self, prefix: str) -> None:
        _clear_prefix(self._settings, prefix)

    def apply(self, plan: List[UpdateSettings]) -> None:
        working = dict(self._settings)
        for update in plan:
            _apply_one(working, update)
        self._settings = working
        log_debug("store", f"Applied {len(plan)} operation(s)", context=f"{len(working)} keys")

    def __len__(self) -> int:
        return len(self._settings)

    def __contains__(self, key: object) -> bool:
        return key in self._settings


def _delete(settings: Dict[str, str], keys: Iterable[str]) -> None:
    for key in keys:
        settings.pop(key, None)


def _clear_prefix(settings: Dict[str, str], prefix: str) -> None:
    for key in [key for key in settings if key.startswith(prefix)]:
        del settings[key]


def _insert_conflicts(settings: Dict[str, str], update: Insert) -> List[str]:
    if update.prefix is not None:
        # A Record entity owns its whole subtree
        subtree = f"{update.prefix}."
        return [key for key in settings if key.startswith(subtree)]
    return [key for key, _ in update.values if key in settings]


def _apply_one(settings: Dict[str, str], update: UpdateSettings) -> None:
    if isinstance(update, Delete):
        _delete(settings, update.keys)
    elif isinstance(update, Clear):
        _clear_prefix(settings, update.prefix)
    elif isinstance(update, Insert):
        if update.assert_empty:
            conflicts = _insert_conflicts(settings, update)
            if conflicts:
                log_warning("store", "Insert rejected, keys already exist", context=", ".join(conflicts))
                raise StoreConflictError(conflicts)
        settings.update(update.items())
    else:
        raise TypeError(f"Unsupported update: {type(update).__name__}")
