"""Store mutation operations emitted by the update planner."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Delete:
    """Remove the listed exact keys."""

    keys: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "Delete", "keys": list(self.keys)}


@dataclass(frozen=True)
class Clear:
    """Remove every key starting with ``prefix``."""

    prefix: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "Clear", "prefix": self.prefix}


@dataclass(frozen=True)
class Insert:
    """
    Write key/value pairs, relative to ``prefix`` when one is set.

    ``assert_empty`` asks the executor to reject the insert if any target
    key already exists.
    """

    prefix: Optional[str] = None
    values: List[Tuple[str, str]] = field(default_factory=list)
    assert_empty: bool = False

    def full_key(self, key: str) -> str:
        return f"{self.prefix}.{key}" if self.prefix is not None else key

    def items(self) -> List[Tuple[str, str]]:
        return [(self.full_key(key), value) for key, value in self.values]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "Insert",
            "prefix": self.prefix,
            "values": [[key, value] for key, value in self.values],
            "assert_empty": self.assert_empty,
        }


UpdateSettings = Union[Delete, Clear, Insert]


def update_from_dict(payload: Dict[str, Any]) -> UpdateSettings:
    tag = payload.get("type")
    if tag == "Delete":
        return Delete(keys=[str(key) for key in payload.get("keys", [])])
    if tag == "Clear":
        return Clear(prefix=str(payload["prefix"]))
    if tag == "Insert":
        return Insert(
            prefix=payload.get("prefix"),
            values=[(str(key), str(value)) for key, value in payload.get("values", [])],
            assert_empty=bool(payload.get("assert_empty", False)),
        )
    raise ValueError(f"Unknown update type: {tag!r}")


def plan_to_json(plan: List[UpdateSettings], indent: Optional[int] = None) -> str:
    return json.dumps([update.to_dict() for update in plan], indent=indent)


def plan_from_json(text: str) -> List[UpdateSettings]:
    payload = json.loads(text)
    if not isinstance(payload, list):
        raise ValueError("A plan must be a JSON list")
    return [update_from_dict(item) for item in payload]
