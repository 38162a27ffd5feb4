"""Connection configuration and management.

ConnectionConfig is a Pydantic model for type-safe connection config.
ConnectionManager owns a single lazily-opened connection and delegates
driver specifics to a SyncAdapter.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from pydantic import BaseModel

from row_shape.core.enums import DatabaseBackend, FetchMode
from row_shape.core.exceptions import AdapterError, ConnectionError  # noqa: A004

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Configuration for database connections."""

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    charset: str | None = None
    default_fetch_mode: FetchMode = FetchMode.ASSOC
    extra: dict[str, Any] = {}


# Adapter module mapping: backend → (module_path, adapter_class)
_ADAPTER_MAP: dict[DatabaseBackend, tuple[str, str]] = {
    DatabaseBackend.SQLITE: ("row_shape.adapters.sqlite", "SqliteSyncAdapter"),
    DatabaseBackend.POSTGRESQL: ("row_shape.adapters.postgresql", "PostgresqlSyncAdapter"),
    DatabaseBackend.MYSQL: ("row_shape.adapters.mysql", "MysqlSyncAdapter"),
    DatabaseBackend.ORACLE: ("row_shape.adapters.oracle", "OracleSyncAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Load an adapter by driver name."""
    try:
        backend = DatabaseBackend(driver.lower())
    except ValueError:
        raise AdapterError(f"Unsupported database driver: {driver}") from None

    module_path, cls_name = _ADAPTER_MAP[backend]
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


class ConnectionManager:
    """Owns one connection for the lifetime of an Engine."""

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config
        self._adapter = _load_adapter(config.driver)
        self._connection: Any = None

    @property
    def adapter(self) -> Any:
        return self._adapter

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def connect(self) -> Any:
        """Return the live connection, opening it on first use."""
        if self._connection is None:
            try:
                self._connection = self._adapter.connect(self.config)
            except Exception as e:
                raise ConnectionError(
                    f"Could not connect to {self.config.driver} database "
                    f"'{self.config.database}': {e}"
                ) from e
            logger.debug("Opened %s connection to %s", self.config.driver, self.config.database)
        return self._connection

    def close(self) -> None:
        """Close the connection if it is open."""
        if self._connection is not None:
            self._adapter.close(self._connection)
            self._connection = None
            logger.debug("Closed %s connection", self.config.driver)
