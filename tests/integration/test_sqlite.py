"""Integration test for SQLite full workflow.

Covers: engine queries, every fetch mode, object mapping, streaming and
transactions end-to-end against a real SQLite database file.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest
from pydantic import BaseModel

from row_shape import ABSENT, ConnectionConfig, Engine, FetchMode
from row_shape.core.exceptions import ColumnArityError, InvalidModeError, TransactionFailure

# --- Test models ---


@dataclass
class Order:
    id: int
    amount: float


class OrderModel(BaseModel):
    id: int
    amount: float


class Audited:
    def __init__(self, auditor: str, id: int, name: str) -> None:
        self.auditor = auditor
        self.id = id
        self.name = name


# --- Fixtures ---


@pytest.fixture
def shop(tmp_path: Path):
    """Engine on a file-backed SQLite database with users and orders."""
    config = ConnectionConfig(driver="sqlite", database=str(tmp_path / "shop.db"))
    eng = Engine.from_config(config)
    eng.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, team TEXT NOT NULL)"
    ).close()
    eng.execute(
        "CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER NOT NULL, "
        "amount REAL NOT NULL)"
    ).close()
    eng.atomic(
        "INSERT INTO users (id, name, team) VALUES (?, ?, ?)",
        [(1, "Alice", "red"), (2, "Bob", "blue"), (3, "Carol", "red")],
    )
    eng.atomic(
        "INSERT INTO orders (id, user_id, amount) VALUES (:id, :user_id, :amount)",
        [
            {"id": 10, "user_id": 1, "amount": 9.5},
            {"id": 11, "user_id": 1, "amount": 20.0},
            {"id": 12, "user_id": 3, "amount": 4.25},
        ],
    )
    yield eng
    eng.close()


# --- Integration Tests ---


@pytest.mark.integration
class TestSqliteFetchModes:
    def test_assoc_and_num(self, shop: Engine) -> None:
        assert shop.fetch_all("SELECT id, name FROM users ORDER BY id", mode="num") == [
            [1, "Alice"],
            [2, "Bob"],
            [3, "Carol"],
        ]
        rows = shop.fetch_all("SELECT id, name, team FROM users ORDER BY id")
        assert all(list(r) == ["id", "name", "team"] for r in rows)

    def test_obj_with_constructor_args(self, shop: Engine) -> None:
        users = shop.fetch_all(
            "SELECT id, name FROM users ORDER BY id", mode="obj", target=Audited, ctor_args=["ops"]
        )
        assert [(u.auditor, u.name) for u in users] == [
            ("ops", "Alice"),
            ("ops", "Bob"),
            ("ops", "Carol"),
        ]

    def test_key_pair(self, shop: Engine) -> None:
        assert shop.fetch_all("SELECT id, name FROM users", mode="keyPair") == {
            1: "Alice",
            2: "Bob",
            3: "Carol",
        }

    def test_key_pair_arr(self, shop: Engine) -> None:
        result = shop.fetch_all("SELECT id, name, team FROM users", mode=FetchMode.KEY_PAIR_ARR)
        assert result[2] == {"name": "Bob", "team": "blue"}

    def test_group(self, shop: Engine) -> None:
        result = shop.fetch_all(
            "SELECT user_id, id, amount FROM orders ORDER BY id", mode="group"
        )
        assert result == {
            1: [{"id": 10, "amount": 9.5}, {"id": 11, "amount": 20.0}],
            3: [{"id": 12, "amount": 4.25}],
        }

    def test_group_col(self, shop: Engine) -> None:
        result = shop.fetch_all("SELECT team, name FROM users ORDER BY id", mode="groupCol")
        assert result == {"red": ["Alice", "Carol"], "blue": ["Bob"]}

    def test_group_obj_with_dataclass(self, shop: Engine) -> None:
        result = shop.fetch_all(
            "SELECT user_id, id, amount FROM orders ORDER BY id", mode="groupObj", target=Order
        )
        assert result == {1: [Order(10, 9.5), Order(11, 20.0)], 3: [Order(12, 4.25)]}

    def test_group_obj_with_pydantic(self, shop: Engine) -> None:
        result = shop.fetch_all(
            "SELECT user_id, id, amount FROM orders WHERE user_id = ?",
            [3],
            mode="groupObj",
            target=OrderModel,
        )
        assert result == {3: [OrderModel(id=12, amount=4.25)]}

    def test_join_aggregate(self, shop: Engine) -> None:
        totals = shop.fetch_all(
            "SELECT u.name, SUM(o.amount) FROM users u JOIN orders o ON o.user_id = u.id "
            "GROUP BY u.name ORDER BY u.name",
            mode="keyPair",
        )
        assert totals == {"Alice": 29.5, "Carol": 4.25}

    def test_scalar_on_empty_result(self, shop: Engine) -> None:
        assert shop.select("SELECT amount FROM orders WHERE id = 99", mode="scalar") is ABSENT


@pytest.mark.integration
class TestSqliteResultHandle:
    def test_fetch_one_walks_rows_then_absent(self, shop: Engine) -> None:
        with shop.execute("SELECT name FROM users ORDER BY id") as result:
            names = [result.fetch_one("col") for _ in range(3)]
            assert names == ["Alice", "Bob", "Carol"]
            assert result.fetch_one("col") is ABSENT

    def test_streaming(self, shop: Engine) -> None:
        with shop.execute("SELECT id FROM orders ORDER BY id") as result:
            assert [row["id"] for row in result] == [10, 11, 12]

    def test_bad_mode_does_not_consume_rows(self, shop: Engine) -> None:
        with shop.execute("SELECT id, name FROM users ORDER BY id") as result:
            with pytest.raises(ColumnArityError):
                result.fetch_all("col")
            with pytest.raises(InvalidModeError):
                result.fetch_all("assoc", target=Order)
            assert len(result.fetch_all()) == 3

    def test_reexecute_keeps_old_output(self, shop: Engine) -> None:
        first = shop.fetch_all("SELECT name FROM users WHERE team = ?", ["red"], "col")
        shop.update("UPDATE users SET team = 'blue'")
        second = shop.fetch_all("SELECT name FROM users WHERE team = ?", ["red"], "col")
        assert first == ["Alice", "Carol"]
        assert second == []


@pytest.mark.integration
class TestSqliteTransactions:
    def test_callback_failure_rolls_back(self, shop: Engine) -> None:
        def transfer(tx) -> None:
            tx.update("UPDATE orders SET user_id = ? WHERE user_id = ?", [2, 1])
            raise RuntimeError("ledger closed")

        with pytest.raises(TransactionFailure, match="ledger closed"):
            shop.run_in_transaction(transfer)

        owners = shop.fetch_all("SELECT id, user_id FROM orders", mode="keyPair")
        assert owners == {10: 1, 11: 1, 12: 3}

    def test_persisted_across_connections(self, shop: Engine, tmp_path: Path) -> None:
        with shop.transaction() as tx:
            tx.insert("INSERT INTO users (id, name, team) VALUES (?, ?, ?)", (4, "Dave", "blue"))

        config = ConnectionConfig(driver="sqlite", database=str(tmp_path / "shop.db"))
        with Engine.from_config(config) as other:
            assert other.select("SELECT name FROM users WHERE id = 4", mode="scalar") == "Dave"
