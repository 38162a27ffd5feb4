"""Transaction management.

TransactionManager runs statements on the engine's connection with
autocommit disabled. It commits on a clean exit, rolls back on exception,
and always turns autocommit back on before returning.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from row_shape.core.enums import FetchMode
from row_shape.core.exceptions import TransactionStateError
from row_shape.core.statement import StatementRunner

logger = logging.getLogger(__name__)


class _TxState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class TransactionManager(StatementRunner):
    """Synchronous transaction context manager."""

    def __init__(
        self,
        connection: Any,
        adapter: Any,
        default_mode: FetchMode = FetchMode.ASSOC,
        allow_commit: bool = True,
    ) -> None:
        self._conn = connection
        self._adapter = adapter
        self._default_mode = default_mode
        self._allow_commit = allow_commit
        self._state = _TxState.IDLE

    @property
    def state(self) -> str:
        return self._state.value

    def __enter__(self) -> TransactionManager:
        if self._state != _TxState.IDLE:
            raise TransactionStateError(self._state.value, "begin")
        self._adapter.set_autocommit(self._conn, False)
        self._state = _TxState.ACTIVE
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        try:
            if self._state == _TxState.ACTIVE:
                if exc_type is not None:
                    logger.warning(
                        "Rolling back transaction after %s: %s", exc_type.__name__, exc_val
                    )
                    self._conn.rollback()
                    self._state = _TxState.ROLLED_BACK
                else:
                    self._conn.commit()
                    self._state = _TxState.COMMITTED
        finally:
            self._adapter.set_autocommit(self._conn, True)

    def _connection(self) -> Any:
        self._check_active()
        return self._conn

    def commit(self) -> None:
        """Explicitly commit the transaction.

        Not available when the transaction was opened with
        ``allow_commit=False``; its owner commits on exit.
        """
        if not self._allow_commit:
            raise TransactionStateError(self._state.value, "commit externally managed")
        if self._state == _TxState.ROLLED_BACK:
            raise TransactionStateError("rolled_back", "commit")
        if self._state == _TxState.COMMITTED:
            raise TransactionStateError("committed", "commit")
        if self._state == _TxState.IDLE:
            raise TransactionStateError("idle", "commit")
        self._conn.commit()
        self._state = _TxState.COMMITTED

    def rollback(self) -> None:
        """Explicitly rollback the transaction.

        Inside a ``with`` block this is the way to abandon the work
        without raising; the block's exit then neither commits nor rolls
        back again.
        """
        if self._state == _TxState.COMMITTED:
            raise TransactionStateError("committed", "rollback")
        if self._state == _TxState.IDLE:
            raise TransactionStateError("idle", "rollback")
        self._conn.rollback()
        self._state = _TxState.ROLLED_BACK

    def _check_active(self) -> None:
        if self._state != _TxState.ACTIVE:
            raise TransactionStateError(self._state.value, "execute")
