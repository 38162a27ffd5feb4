"""Query execution engine.

The Engine binds parameters, executes statements through the adapter on a
single managed connection, and hands back Result handles or shaped rows.
It also runs scripted and callback-driven transactions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from row_shape.core.connection import ConnectionConfig, ConnectionManager
from row_shape.core.enums import FetchMode
from row_shape.core.exceptions import TransactionFailure
from row_shape.core.result import WriteResult
from row_shape.core.statement import StatementRunner
from row_shape.core.transaction import TransactionManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Engine(StatementRunner):
    """Synchronous query execution engine."""

    def __init__(
        self,
        connection_manager: ConnectionManager,
        default_mode: FetchMode | None = None,
    ) -> None:
        self._connection_manager = connection_manager
        self._adapter = connection_manager.adapter
        self._default_mode = default_mode or connection_manager.config.default_fetch_mode

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> Engine:
        """Create an Engine from a ConnectionConfig.

        Args:
            config: ConnectionConfig instance

        Returns:
            Engine instance
        """
        return cls(ConnectionManager(config))

    def _connection(self) -> Any:
        return self._connection_manager.connect()

    def transaction(self, allow_commit: bool = True) -> TransactionManager:
        """Create a new transaction context manager.

        With ``allow_commit=False`` the block may not call ``commit()``
        itself; the transaction commits only on a clean exit.
        """
        return TransactionManager(
            connection=self._connection_manager.connect(),
            adapter=self._adapter,
            default_mode=self._default_mode,
            allow_commit=allow_commit,
        )

    def atomic(
        self,
        sql: str | Sequence[str],
        values: Sequence[Any],
        min_affected_rows: int = 1,
    ) -> list[WriteResult]:
        """Run a scripted batch of writes as one transaction.

        Args:
            sql: One statement reused for every parameter set, or one
                 statement per parameter set.
            values: Parameter sets, one per statement execution.
            min_affected_rows: Each statement must change at least this
                 many rows or the whole batch is rolled back.

        Returns:
            One WriteResult per executed statement.

        Raises:
            ValueError: If the statement list and parameter sets differ in
                length. Nothing is executed.
            TransactionFailure: If a statement changed too few rows.
        """
        statements = [sql] * len(values) if isinstance(sql, str) else list(sql)
        if len(statements) != len(values):
            raise ValueError(
                f"{len(statements)} statements given for {len(values)} parameter sets"
            )

        logger.debug("Running %d statements in one transaction", len(statements))
        results: list[WriteResult] = []
        with self.transaction() as tx:
            for index, (statement, params) in enumerate(zip(statements, values, strict=True)):
                outcome = tx.update(statement, params)
                if outcome.affected_rows < min_affected_rows:
                    raise TransactionFailure(
                        f"statement {index} affected {outcome.affected_rows} rows, "
                        f"expected at least {min_affected_rows}",
                        statement_index=index,
                    )
                results.append(outcome)
        return results

    def run_in_transaction(
        self,
        callback: Callable[..., T],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Call ``callback(tx, *args, **kwargs)`` inside a transaction.

        The transaction commits when the callback returns, unless the
        callback already called ``tx.rollback()``. The callback may not
        commit on its own. Any exception rolls the transaction back and is
        re-raised as TransactionFailure.
        """
        with self.transaction(allow_commit=False) as tx:
            try:
                return callback(tx, *args, **kwargs)
            except TransactionFailure:
                raise
            except Exception as e:
                raise TransactionFailure(f"callback raised {type(e).__name__}: {e}") from e

    def close(self) -> None:
        """Close the underlying connection."""
        self._connection_manager.close()

    def __enter__(self) -> Engine:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()
