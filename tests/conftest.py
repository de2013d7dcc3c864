"""
Shared pytest fixtures for kvform tests.

Provides sample schemas of every storage shape and a clean logger/config
state per test.
"""

import sys
from pathlib import Path

import pytest

# Put `src/` first so `import kvform` uses workspace code.
_REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from kvform.core.schema import (  # noqa: E402
    Array,
    Entry,
    Expression,
    Field,
    Input,
    List,
    Record,
    Schema,
    Secret,
    Select,
    StaticSource,
)
from kvform.core.utils import config as config_module  # noqa: E402


# ============================================================================
# Schema Fixtures
# ============================================================================


@pytest.fixture
def record_schema() -> Schema:
    """Keyed collection of listeners."""
    return (
        Schema(id="listener", typ=Record(prefix="server.listener"))
        .add_field(Field(id="protocol", typ=Input()))
        .add_field(Field(id="bind", typ=Array()))
        .add_field(Field(id="rule", typ=Expression()))
    )


@pytest.fixture
def entry_schema() -> Schema:
    """Single key per entry."""
    return Schema(id="store", typ=Entry(prefix="store")).add_field(
        Field(id="_value", typ=Input())
    )


@pytest.fixture
def list_schema() -> Schema:
    """Flat top-level fields."""
    return (
        Schema(id="server", typ=List())
        .add_field(Field(id="server.hostname", typ=Input()))
        .add_field(Field(id="server.secret", typ=Secret()))
        .add_field(Field(id="server.bind", typ=Array()))
        .add_field(
            Field(
                id="server.mode",
                typ=Select(source=StaticSource((("1", "One"), ("2", "Two")))),
            )
        )
        .add_field(
            Field(
                id="server.tags",
                typ=Select(source=StaticSource((("a", "A"), ("b", "B"))), multi=True),
            )
        )
    )


# ============================================================================
# Global state
# ============================================================================


@pytest.fixture(autouse=True)
def clean_kvform_env(monkeypatch):
    """Drop KVFORM_* environment overrides and the cached config."""
    import os

    for key in list(os.environ.keys()):
        if key.startswith("KVFORM_"):
            monkeypatch.delenv(key, raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()
