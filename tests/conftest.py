"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from row_shape.core.connection import ConnectionConfig, ConnectionManager
from row_shape.core.engine import Engine
from row_shape.core.result import ColumnDescriptor


class SpyRowSource:
    """In-memory row source that records how many rows were read."""

    def __init__(self, names: list[str], rows: list[tuple[Any, ...]]) -> None:
        self.columns = [ColumnDescriptor(name, i) for i, name in enumerate(names)]
        self._rows: Iterator[tuple[Any, ...]] = iter(rows)
        self.reads = 0

    def next_row(self) -> tuple[Any, ...] | None:
        self.reads += 1
        return next(self._rows, None)


@pytest.fixture
def source() -> Callable[..., SpyRowSource]:
    """Factory for spy row sources.

    Usage:
        src = source(["id", "name"], [(1, "Alice"), (2, "Bob")])
    """

    def _make(names: list[str], rows: list[tuple[Any, ...]]) -> SpyRowSource:
        return SpyRowSource(names, rows)

    return _make


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:")


@pytest.fixture
def engine(sqlite_config: ConnectionConfig) -> Iterator[Engine]:
    """Engine on an in-memory SQLite database with a seeded users table."""
    eng = Engine(ConnectionManager(sqlite_config))
    eng.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, "
        "name TEXT NOT NULL, email TEXT NOT NULL, team TEXT)"
    ).close()
    for name, email, team in [
        ("Alice", "alice@example.com", "red"),
        ("Bob", "bob@example.com", "blue"),
        ("Carol", "carol@example.com", "red"),
    ]:
        eng.insert("INSERT INTO users (name, email, team) VALUES (?, ?, ?)", (name, email, team))
    yield eng
    eng.close()
