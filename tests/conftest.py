"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from row_mapper.core.connection import ConnectionConfig, ConnectionManager
from row_mapper.core.engine import Engine
from row_mapper.mapping.protocol import RawRow
from row_mapper.mapping.registry import TypeMappings


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def type_mappings() -> TypeMappings:
    """Fresh, empty set of coercion overrides."""
    return TypeMappings()


@pytest.fixture
def engine(sqlite_config: ConnectionConfig, type_mappings: TypeMappings) -> Iterator[Engine]:
    """Engine over a single in-memory SQLite connection."""
    eng = Engine(ConnectionManager(sqlite_config), type_mappings)
    yield eng
    eng.close()


@pytest.fixture
def make_row():
    """Helper to build RawRows from keyword arguments or pairs.

    Usage:
        make_row(id=1, device_id="A")
        make_row(("ID", 1), ("id", 2))
    """

    def _make(*pairs: tuple[str, object], **columns: object) -> RawRow:
        items = list(pairs) + list(columns.items())
        return RawRow(tuple(k for k, _ in items), tuple(v for _, v in items))

    return _make
