"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import sqlite3
from typing import Any

from row_shape.core.connection import ConnectionConfig


class SqliteSyncAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "named"

    @property
    def positional_style(self) -> str:
        return "qmark"

    @property
    def escape_percent(self) -> bool:
        return False

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        """Open a connection; ``isolation_level=None`` means autocommit."""
        return sqlite3.connect(config.database, isolation_level=None, **config.extra)

    def close(self, connection: sqlite3.Connection) -> None:
        connection.close()

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        return connection.execute(sql, params if params is not None else ())

    def set_autocommit(self, connection: sqlite3.Connection, enabled: bool) -> None:
        # An empty isolation level makes sqlite3 open a transaction before DML
        connection.isolation_level = None if enabled else ""

    def last_insert_id(self, cursor: sqlite3.Cursor) -> Any:
        return cursor.lastrowid

    def info(self, cursor: sqlite3.Cursor) -> str:
        return ""
