"""MySQL adapter using mysql-connector-python."""

from __future__ import annotations

from typing import Any

from row_shape.core.connection import ConnectionConfig


class MysqlSyncAdapter:
    """Synchronous MySQL adapter using mysql-connector-python."""

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    @property
    def positional_style(self) -> str:
        return "format"

    @property
    def escape_percent(self) -> bool:
        return False

    def connect(self, config: ConnectionConfig) -> Any:
        import mysql.connector

        options: dict[str, Any] = {
            "host": config.host,
            "user": config.user,
            "password": config.password,
            "database": config.database,
            "autocommit": True,
        }
        if config.port is not None:
            options["port"] = config.port
        if config.charset is not None:
            options["charset"] = config.charset
        options.update(config.extra)
        return mysql.connector.connect(**options)

    def close(self, connection: Any) -> None:
        connection.close()

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        """Execute SQL and return a buffered cursor with tuple rows.

        Buffering lets a partially read result be closed without
        "unread result" errors.
        """
        cursor = connection.cursor(buffered=True)
        cursor.execute(sql, params)
        return cursor

    def set_autocommit(self, connection: Any, enabled: bool) -> None:
        connection.autocommit = enabled

    def last_insert_id(self, cursor: Any) -> Any:
        return cursor.lastrowid

    def info(self, cursor: Any) -> str:
        warnings = cursor.warning_count
        return f"Warnings: {warnings}" if warnings else ""
