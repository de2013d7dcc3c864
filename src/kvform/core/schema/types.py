"""Schema descriptor types: storage shapes, field types and select sources."""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from typing import Dict, Iterator, Optional, Tuple, Union

# Control fields start with this marker and never reach the store as data.
CONTROL_FIELD_MARKER = "_"
ID_FIELD = "_id"
VALUE_FIELD = "_value"


def is_control_field(field_id: str) -> bool:
    return field_id.startswith(CONTROL_FIELD_MARKER)


# ---------------------------------------------------------------------------
# Select sources
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StaticSource:
    """Fixed list of (stored value, display label) pairs."""

    items: Tuple[Tuple[str, str], ...] = ()

    def label_for(self, value: str) -> Optional[str]:
        for key, label in self.items:
            if key == value:
                return label
        return None


@dataclass(frozen=True)
class DynamicSource:
    """Options taken from the entries of another schema."""

    schema: str
    field: str
    filter: Tuple[str, ...] = ()


Source = Union[StaticSource, DynamicSource]


# ---------------------------------------------------------------------------
# Field types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Input:
    """Free-text input."""


@dataclass(frozen=True)
class Secret:
    """Masked text input."""


@dataclass(frozen=True)
class Duration:
    """Duration expression such as ``30m`` or ``4d``."""


@dataclass(frozen=True)
class Rate:
    """Rate expression ``N/period`` such as ``10/1m``."""


@dataclass(frozen=True)
class Array:
    """Ordered list of strings stored under index-suffixed keys."""


@dataclass(frozen=True)
class Expression:
    """Conditional if/then/else expression."""


@dataclass(frozen=True)
class Select:
    source: Source
    multi: bool = False


Type = Union[Input, Secret, Duration, Rate, Array, Expression, Select]


@dataclass(frozen=True)
class Field:
    """A single configurable field; ``id`` doubles as its key suffix."""

    id: str
    typ: Type = dataclass_field(default_factory=Input)
    label: str = ""
    help: str = ""
    default: Optional[str] = None

    def is_multivalue(self) -> bool:
        typ = self.typ
        if isinstance(typ, (Array, Expression)):
            return True
        if isinstance(typ, Select):
            return typ.multi
        return False


# ---------------------------------------------------------------------------
# Storage shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Record:
    """Keyed collection stored under ``{prefix}.{id}.``."""

    prefix: str


@dataclass(frozen=True)
class Entry:
    """Single flat key ``{prefix}.{id}`` holding one scalar."""

    prefix: str


@dataclass(frozen=True)
class List:
    """Flat set of independently addressed top-level fields."""


SchemaType = Union[Record, Entry, List]


@dataclass
class Schema:
    """Storage shape plus the ordered fields an entity owns."""

    id: str
    typ: SchemaType
    fields: Dict[str, Field] = dataclass_field(default_factory=dict)

    def add_field(self, field: Field) -> "Schema":
        self.fields[field.id] = field
        return self

    def field(self, field_id: str) -> Optional[Field]:
        return self.fields.get(field_id)

    def shape_name(self) -> str:
        return type(self.typ).__name__.lower()


class Schemas:
    """Registry of schemas keyed by id."""

    def __init__(self) -> None:
        self._schemas: Dict[str, Schema] = {}

    def add(self, schema: Schema) -> "Schemas":
        self._schemas[schema.id] = schema
        return self

    def get(self, schema_id: str) -> Optional[Schema]:
        return self._schemas.get(schema_id)

    def __contains__(self, schema_id: object) -> bool:
        return schema_id in self._schemas

    def __iter__(self) -> Iterator[Schema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)
