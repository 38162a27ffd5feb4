"""PostgreSQL adapter using psycopg (v3+)."""

from __future__ import annotations

from typing import Any

from row_shape.core.connection import ConnectionConfig


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    if config.charset is not None:
        parts.append(f"client_encoding={config.charset}")
    parts.append(f"dbname={config.database}")
    return " ".join(parts)


class PostgresqlSyncAdapter:
    """Synchronous PostgreSQL adapter using psycopg (v3+)."""

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    @property
    def positional_style(self) -> str:
        return "format"

    @property
    def escape_percent(self) -> bool:
        return True

    def connect(self, config: ConnectionConfig) -> Any:
        import psycopg

        return psycopg.connect(_build_conninfo(config), autocommit=True, **config.extra)

    def close(self, connection: Any) -> None:
        connection.close()

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        """Execute SQL and return a cursor with tuple rows."""
        cursor = connection.cursor()
        cursor.execute(sql, params)
        return cursor

    def set_autocommit(self, connection: Any, enabled: bool) -> None:
        connection.autocommit = enabled

    def last_insert_id(self, cursor: Any) -> Any:
        # PostgreSQL has no implicit insert id; use INSERT ... RETURNING
        return None

    def info(self, cursor: Any) -> str:
        return cursor.statusmessage or ""
