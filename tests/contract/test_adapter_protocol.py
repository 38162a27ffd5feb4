"""Contract tests for adapter protocol compliance."""

from __future__ import annotations

import pytest

from row_shape.adapters.protocol import SyncAdapter
from row_shape.adapters.sqlite import SqliteSyncAdapter
from row_shape.core.connection import ConnectionConfig, ConnectionManager
from row_shape.core.exceptions import AdapterError


class TestSqliteSyncAdapterProtocol:
    def test_implements_sync_protocol(self) -> None:
        adapter = SqliteSyncAdapter()
        assert isinstance(adapter, SyncAdapter)

    def test_paramstyle(self) -> None:
        adapter = SqliteSyncAdapter()
        assert adapter.paramstyle == "named"
        assert adapter.positional_style == "qmark"
        assert adapter.escape_percent is False

    def test_lifecycle(self, sqlite_config: ConnectionConfig) -> None:
        adapter = SqliteSyncAdapter()
        conn = adapter.connect(sqlite_config)
        assert conn is not None

        cursor = adapter.execute(conn, "SELECT 1 AS val, ? AS other", (2,))
        assert [d[0] for d in cursor.description] == ["val", "other"]
        assert cursor.fetchone() == (1, 2)
        assert adapter.info(cursor) == ""

        adapter.close(conn)

    def test_autocommit_toggle(self, sqlite_config: ConnectionConfig) -> None:
        adapter = SqliteSyncAdapter()
        conn = adapter.connect(sqlite_config)
        assert conn.isolation_level is None

        adapter.set_autocommit(conn, False)
        assert conn.isolation_level == ""
        adapter.set_autocommit(conn, True)
        assert conn.isolation_level is None
        adapter.close(conn)

    def test_last_insert_id(self, sqlite_config: ConnectionConfig) -> None:
        adapter = SqliteSyncAdapter()
        conn = adapter.connect(sqlite_config)
        adapter.execute(conn, "CREATE TABLE t (id INTEGER PRIMARY KEY, v TEXT)")
        cursor = adapter.execute(conn, "INSERT INTO t (v) VALUES (:v)", {"v": "x"})
        assert adapter.last_insert_id(cursor) == 1
        adapter.close(conn)


# --- PostgreSQL protocol compliance ---


class TestPostgresqlSyncAdapterProtocol:
    def test_implements_sync_protocol(self) -> None:
        from row_shape.adapters.postgresql import PostgresqlSyncAdapter

        adapter = PostgresqlSyncAdapter()
        assert isinstance(adapter, SyncAdapter)

    def test_paramstyle(self) -> None:
        from row_shape.adapters.postgresql import PostgresqlSyncAdapter

        adapter = PostgresqlSyncAdapter()
        assert adapter.paramstyle == "pyformat"
        assert adapter.positional_style == "format"
        assert adapter.escape_percent is True

    def test_conninfo(self) -> None:
        from row_shape.adapters.postgresql import _build_conninfo

        config = ConnectionConfig(
            driver="postgresql", host="db", port=5432, user="app", database="main", charset="UTF8"
        )
        assert _build_conninfo(config) == (
            "host=db port=5432 user=app client_encoding=UTF8 dbname=main"
        )


# --- MySQL protocol compliance ---


class TestMysqlSyncAdapterProtocol:
    def test_implements_sync_protocol(self) -> None:
        from row_shape.adapters.mysql import MysqlSyncAdapter

        adapter = MysqlSyncAdapter()
        assert isinstance(adapter, SyncAdapter)

    def test_paramstyle(self) -> None:
        from row_shape.adapters.mysql import MysqlSyncAdapter

        adapter = MysqlSyncAdapter()
        assert adapter.paramstyle == "pyformat"
        assert adapter.positional_style == "format"
        # mysql-connector sends %% to the server unchanged
        assert adapter.escape_percent is False


# --- Oracle protocol compliance ---


class TestOracleSyncAdapterProtocol:
    def test_implements_sync_protocol(self) -> None:
        from row_shape.adapters.oracle import OracleSyncAdapter

        adapter = OracleSyncAdapter()
        assert isinstance(adapter, SyncAdapter)

    def test_paramstyle(self) -> None:
        from row_shape.adapters.oracle import OracleSyncAdapter

        adapter = OracleSyncAdapter()
        assert adapter.paramstyle == "named"
        assert adapter.positional_style == "numeric"
        assert adapter.escape_percent is False


# --- Adapter loading ---


class TestAdapterLoading:
    def test_driver_name_is_case_insensitive(self) -> None:
        manager = ConnectionManager(ConnectionConfig(driver="SQLite", database=":memory:"))
        assert isinstance(manager.adapter, SqliteSyncAdapter)

    def test_unsupported_driver(self) -> None:
        with pytest.raises(AdapterError, match="Unsupported database driver: mssql"):
            ConnectionManager(ConnectionConfig(driver="mssql", database="x"))

    def test_connection_is_lazy_and_reused(self, sqlite_config: ConnectionConfig) -> None:
        manager = ConnectionManager(sqlite_config)
        assert not manager.is_open
        conn = manager.connect()
        assert manager.connect() is conn
        manager.close()
        assert not manager.is_open
