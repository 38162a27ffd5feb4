"""Database adapter protocol.

Every adapter module MUST implement this protocol so the engine can treat
all backends identically.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_shape.core.connection import ConnectionConfig


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """Named binding style: 'named' (:name) or 'pyformat' (%(name)s)."""
        ...

    @property
    def positional_style(self) -> str:
        """Positional binding style: 'qmark' (?), 'format' (%s) or 'numeric' (:1)."""
        ...

    @property
    def escape_percent(self) -> bool:
        """True if the driver expects literal ``%`` written as ``%%`` when binding."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open a connection in autocommit mode."""
        ...

    def close(self, connection: Any) -> None:
        """Close a connection."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        """Execute SQL and return a cursor yielding tuple rows."""
        ...

    def set_autocommit(self, connection: Any, enabled: bool) -> None:
        """Switch autocommit on or off."""
        ...

    def last_insert_id(self, cursor: Any) -> Any:
        """Id generated by the last INSERT, or None."""
        ...

    def info(self, cursor: Any) -> str:
        """Driver status text for the last statement, or an empty string."""
        ...
