"""Result handles returned by statement execution.

A Result wraps one DB-API cursor. It is a single-pass, forward-only row
source: rows handed out by fetch_one, fetch_all or iter_rows are never
returned again, and reading again requires executing the statement again.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from row_shape.core.enums import FetchMode
from row_shape.core.exceptions import ExecutionError
from row_shape.mapping import shaper


@dataclass(frozen=True)
class ColumnDescriptor:
    """Name and zero-based position of a result column."""

    name: str
    ordinal: int


@dataclass(frozen=True)
class WriteResult:
    """Outcome of an INSERT, UPDATE or DELETE."""

    affected_rows: int
    insert_id: Any = None
    info: str = ""


def _describe(cursor: Any) -> list[ColumnDescriptor]:
    """Build column descriptors from ``cursor.description``."""
    if cursor.description is None:
        return []
    return [ColumnDescriptor(desc[0], ordinal) for ordinal, desc in enumerate(cursor.description)]


class Result:
    """Executed statement: column metadata plus a row cursor."""

    def __init__(
        self,
        cursor: Any,
        *,
        label: str = "<statement>",
        default_mode: FetchMode | str = FetchMode.ASSOC,
        last_insert_id: Any = None,
        info: str = "",
    ) -> None:
        self._cursor = cursor
        self._label = label
        self._default_mode = default_mode
        self._columns = _describe(cursor)
        self._affected_row_count = int(cursor.rowcount) if cursor.rowcount is not None else -1
        self._last_insert_id = last_insert_id
        self._info = info
        self._exhausted = not self._columns
        self._closed = False

    @property
    def columns(self) -> list[ColumnDescriptor]:
        return self._columns

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self._columns]

    @property
    def affected_row_count(self) -> int:
        """Rows changed by the statement; -1 when the driver cannot tell."""
        return self._affected_row_count

    @property
    def last_insert_id(self) -> Any:
        return self._last_insert_id

    @property
    def info(self) -> str:
        """Driver status text for the statement, empty when unavailable."""
        return self._info

    @property
    def exhausted(self) -> bool:
        return self._exhausted or self._closed

    def next_row(self) -> tuple[Any, ...] | None:
        """Advance the cursor by one row.

        Returns None at end of data and after close().

        Raises:
            ExecutionError: If the driver fails while reading.
        """
        if self._exhausted or self._closed:
            return None
        try:
            row = self._cursor.fetchone()
        except Exception as e:
            raise ExecutionError(f"Failed to read result of {self._label}: {e}") from e
        if row is None:
            self._exhausted = True
            return None
        if isinstance(row, dict):
            return tuple(row.values())
        return tuple(row)

    def fetch_one(
        self,
        mode: FetchMode | str | None = None,
        target: Any = None,
        ctor_args: Sequence[Any] = (),
    ) -> Any:
        """Fetch the next row in a single-row shape, or ``ABSENT``."""
        return shaper.fetch_one(self, mode, target, ctor_args, default=self._default_mode)

    def fetch_all(
        self,
        mode: FetchMode | str | None = None,
        target: Any = None,
        ctor_args: Sequence[Any] = (),
    ) -> Any:
        """Fetch every remaining row in an aggregate shape."""
        return shaper.fetch_all(self, mode, target, ctor_args, default=self._default_mode)

    def iter_rows(
        self,
        mode: FetchMode | str | None = None,
        target: Any = None,
        ctor_args: Sequence[Any] = (),
    ) -> Iterator[Any]:
        """Stream the remaining rows in a single-row shape."""
        return shaper.iter_rows(self, mode, target, ctor_args, default=self._default_mode)

    def __iter__(self) -> Iterator[Any]:
        return self.iter_rows()

    def to_write_result(self) -> WriteResult:
        return WriteResult(
            affected_rows=self._affected_row_count,
            insert_id=self._last_insert_id,
            info=self._info,
        )

    def close(self) -> None:
        """Release the cursor. Further reads see end of data."""
        if not self._closed:
            self._closed = True
            self._cursor.close()

    def __enter__(self) -> Result:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()
