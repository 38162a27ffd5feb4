"""Unit tests for Result handles."""

from __future__ import annotations

from typing import Any

import pytest

from row_shape.core.enums import ABSENT, FetchMode
from row_shape.core.exceptions import ColumnArityError, ExecutionError
from row_shape.core.result import ColumnDescriptor, Result, WriteResult


class FakeCursor:
    """Minimal DB-API cursor over canned rows."""

    def __init__(
        self,
        names: list[str] | None,
        rows: list[Any],
        rowcount: int = -1,
        fail_after: int | None = None,
    ) -> None:
        self.description = None if names is None else [(n, None) for n in names]
        self.rowcount = rowcount
        self._rows = list(rows)
        self._fail_after = fail_after
        self.fetches = 0
        self.closed = False

    def fetchone(self) -> Any:
        if self._fail_after is not None and self.fetches >= self._fail_after:
            raise RuntimeError("server has gone away")
        self.fetches += 1
        return self._rows.pop(0) if self._rows else None

    def close(self) -> None:
        self.closed = True


class TestResult:
    def test_columns_from_description(self) -> None:
        result = Result(FakeCursor(["id", "name"], []))
        assert result.columns == [ColumnDescriptor("id", 0), ColumnDescriptor("name", 1)]
        assert result.column_names == ["id", "name"]

    def test_statement_without_rows(self) -> None:
        cursor = FakeCursor(None, [], rowcount=2)
        result = Result(cursor, last_insert_id=7, info="Rows matched: 2")
        assert result.columns == []
        assert result.affected_row_count == 2
        assert result.fetch_one() is ABSENT
        assert result.fetch_all() == []
        assert cursor.fetches == 0
        assert result.to_write_result() == WriteResult(2, 7, "Rows matched: 2")

    def test_default_mode_applies(self) -> None:
        result = Result(FakeCursor(["id"], [(1,), (2,)]), default_mode=FetchMode.NUM)
        assert result.fetch_one() == [1]
        assert result.fetch_all() == [[2]]

    def test_dict_rows_are_normalized(self) -> None:
        result = Result(FakeCursor(["id", "name"], [{"id": 1, "name": "Alice"}]))
        assert result.fetch_one("num") == [1, "Alice"]

    def test_single_pass(self) -> None:
        cursor = FakeCursor(["id"], [(1,), (2,)])
        result = Result(cursor)
        assert result.fetch_all("col") == [1, 2]
        assert result.exhausted
        assert result.fetch_all("col") == []
        assert result.fetch_one("col") is ABSENT
        assert cursor.fetches == 3

    def test_driver_failure_raises_execution_error(self) -> None:
        result = Result(FakeCursor(["id"], [(1,), (2,)], fail_after=1), label="SELECT id FROM t")
        with pytest.raises(ExecutionError, match="SELECT id FROM t") as exc_info:
            result.fetch_all("col")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_arity_error_leaves_cursor_untouched(self) -> None:
        cursor = FakeCursor(["id", "name"], [(1, "Alice")])
        result = Result(cursor)
        with pytest.raises(ColumnArityError):
            result.fetch_all("col")
        assert cursor.fetches == 0
        assert result.fetch_one("assoc") == {"id": 1, "name": "Alice"}

    def test_iteration_uses_default_mode(self) -> None:
        result = Result(FakeCursor(["id"], [(1,), (2,)]))
        assert list(result) == [{"id": 1}, {"id": 2}]

    def test_close(self) -> None:
        cursor = FakeCursor(["id"], [(1,)])
        with Result(cursor) as result:
            pass
        assert cursor.closed
        assert result.exhausted
        assert result.fetch_one() is ABSENT
        assert cursor.fetches == 0
