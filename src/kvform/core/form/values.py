"""Edited form values and the form data handed to the update planner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from kvform.core.schema import Schema


@dataclass(frozen=True)
class Value:
    """Single scalar value."""

    value: str = ""

    def is_empty(self) -> bool:
        return not self.value


@dataclass(frozen=True)
class Array:
    """Ordered list of scalar values."""

    values: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.values


@dataclass(frozen=True)
class IfThen:
    if_: str
    then_: str


@dataclass(frozen=True)
class Expression:
    """Ordered if/then pairs followed by a mandatory fallback."""

    if_thens: List[IfThen] = field(default_factory=list)
    else_: str = ""

    def is_empty(self) -> bool:
        return not self.if_thens and not self.else_


FormValue = Union[Value, Array, Expression]


@dataclass
class FormData:
    """
    Values edited in one form submission.

    ``values`` keeps insertion order, which is the order keys are emitted in.
    Control fields (``_id``, ``_value``) live here alongside data fields.
    """

    schema: Schema
    values: Dict[str, FormValue] = field(default_factory=dict)
    is_update: bool = False

    def set(self, field_id: str, value: Union[FormValue, str]) -> "FormData":
        if isinstance(value, str):
            value = Value(value)
        self.values[field_id] = value
        return self

    def value_as_str(self, field_id: str) -> Optional[str]:
        value = self.values.get(field_id)
        if isinstance(value, Value):
            return value.value
        if isinstance(value, Array) and value.values:
            return value.values[0]
        return None

    def value_is_empty(self, field_id: str) -> bool:
        value = self.values.get(field_id)
        return value is None or value.is_empty()
