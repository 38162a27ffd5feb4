"""Oracle adapter using oracledb."""

from __future__ import annotations

from typing import Any

from row_shape.core.connection import ConnectionConfig


def _build_dsn(config: ConnectionConfig) -> str:
    """Build an Oracle DSN string from config fields (host:port/database)."""
    return f"{config.host}:{config.port}/{config.database}"


class OracleSyncAdapter:
    """Synchronous Oracle adapter using oracledb."""

    @property
    def paramstyle(self) -> str:
        return "named"

    @property
    def positional_style(self) -> str:
        return "numeric"

    @property
    def escape_percent(self) -> bool:
        return False

    def connect(self, config: ConnectionConfig) -> Any:
        import oracledb

        connection = oracledb.connect(
            user=config.user,
            password=config.password,
            dsn=_build_dsn(config),
            **config.extra,
        )
        connection.autocommit = True
        return connection

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
        if params is None:
            cursor.execute(sql)
        else:
            cursor.execute(sql, params)
        return cursor

    def set_autocommit(self, connection: Any, enabled: bool) -> None:
        connection.autocommit = enabled

    def last_insert_id(self, cursor: Any) -> Any:
        # ROWID of the last modified row, not a numeric key
        return cursor.lastrowid

    def info(self, cursor: Any) -> str:
        return ""
