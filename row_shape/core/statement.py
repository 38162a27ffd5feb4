"""Statement execution shared by Engine and TransactionManager.

Subclasses supply the connection; this class binds parameters, runs the
statement through the adapter, and offers the one-shot query and write
helpers on top of ``execute``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from row_shape.core.enums import FetchMode
from row_shape.core.exceptions import QueryError
from row_shape.core.params import prepare_statement
from row_shape.core.result import Result, WriteResult
from row_shape.mapping.shaper import SINGLE_ROW_MODES, check_select_mode

logger = logging.getLogger(__name__)


def _label(sql: str) -> str:
    """Short single-line form of *sql* for logs and error messages."""
    flat = " ".join(sql.split())
    return flat if len(flat) <= 80 else flat[:77] + "..."


class StatementRunner:
    """Executes statements on a connection provided by the subclass."""

    _adapter: Any
    _default_mode: FetchMode

    def _connection(self) -> Any:
        raise NotImplementedError

    @property
    def default_mode(self) -> FetchMode:
        return self._default_mode

    def execute(self, sql: str, params: Any = None) -> Result:
        """Execute *sql* and return its Result handle.

        Args:
            sql: SQL text with ``:name`` (dict params) or ``?`` (positional
                 params) placeholders.
            params: dict, sequence, scalar, or None.

        Raises:
            QueryError: If the driver rejects or fails the statement.
        """
        connection = self._connection()
        sql_text, bound = prepare_statement(
            sql,
            params,
            self._adapter.paramstyle,
            self._adapter.positional_style,
            self._adapter.escape_percent,
        )
        label = _label(sql)
        try:
            cursor = self._adapter.execute(connection, sql_text, bound)
        except Exception as e:
            raise QueryError(label, str(e)) from e
        logger.debug("Executed statement: %s", label)

        return Result(
            cursor,
            label=label,
            default_mode=self._default_mode,
            last_insert_id=self._adapter.last_insert_id(cursor),
            info=self._adapter.info(cursor),
        )

    def select(
        self,
        sql: str,
        params: Any = None,
        mode: FetchMode | str | None = None,
        target: Any = None,
        ctor_args: Sequence[Any] = (),
    ) -> Any:
        """Run a query and shape its rows in one call.

        Single-row modes (``scalar``, ``singleRowAssoc``, ``singleRowObj``,
        ``singleRowNum``) return the first row or ``ABSENT``; every other
        mode returns the full aggregate. An unknown mode is rejected before
        the statement runs.
        """
        fetch_mode = check_select_mode(mode, self._default_mode)
        with self.execute(sql, params) as result:
            if fetch_mode in SINGLE_ROW_MODES:
                return result.fetch_one(mode, target, ctor_args)
            return result.fetch_all(mode, target, ctor_args)

    def fetch_one(
        self,
        sql: str,
        params: Any = None,
        mode: FetchMode | str | None = None,
        target: Any = None,
        ctor_args: Sequence[Any] = (),
    ) -> Any:
        """Run a query and return its first row, or ``ABSENT``."""
        with self.execute(sql, params) as result:
            return result.fetch_one(mode, target, ctor_args)

    def fetch_all(
        self,
        sql: str,
        params: Any = None,
        mode: FetchMode | str | None = None,
        target: Any = None,
        ctor_args: Sequence[Any] = (),
    ) -> Any:
        """Run a query and return all rows in the requested shape."""
        with self.execute(sql, params) as result:
            return result.fetch_all(mode, target, ctor_args)

    def insert(self, sql: str, params: Any = None) -> WriteResult:
        """Execute an INSERT. The result carries the last insert id."""
        with self.execute(sql, params) as result:
            return result.to_write_result()

    def update(self, sql: str, params: Any = None) -> WriteResult:
        """Execute an UPDATE and report the affected row count."""
        with self.execute(sql, params) as result:
            return result.to_write_result()

    def delete(self, sql: str, params: Any = None) -> WriteResult:
        """Execute a DELETE and report the affected row count."""
        with self.execute(sql, params) as result:
            return result.to_write_result()
