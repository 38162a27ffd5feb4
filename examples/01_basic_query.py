"""
Example 01: Basic Query Execution

This example demonstrates executing statements and fetching rows with RowShape's Engine.
"""

from row_shape import ABSENT, Engine, ConnectionConfig, placeholders
import tempfile
from pathlib import Path


def main():
    # Create a temporary database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    config = ConnectionConfig(driver="sqlite", database=db_path)
    engine = Engine.from_config(config)

    engine.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            active INTEGER DEFAULT 1
        )
    """).close()

    print("=== Basic Query Execution ===\n")

    # insert: positional parameters use ? placeholders
    created = engine.insert(
        "INSERT INTO users (name, email) VALUES (?, ?)", ["Alice", "alice@example.com"]
    )
    print(f"insert: {created.affected_rows} row, id {created.insert_id}")
    engine.insert("INSERT INTO users (name, email) VALUES (?, ?)", ["Bob", "bob@example.com"])
    engine.insert(
        "INSERT INTO users (name, email, active) VALUES (:name, :email, 0)",
        {"name": "Charlie", "email": "charlie@example.com"},
    )
    print()

    # fetch_one: the first row, or ABSENT when there is none
    user = engine.fetch_one("SELECT * FROM users WHERE id = ?", 1)
    print(f"fetch_one result: {user}")
    missing = engine.fetch_one("SELECT * FROM users WHERE id = ?", 99)
    print(f"fetch_one on no rows is ABSENT: {missing is ABSENT}\n")

    # fetch_all: every row, as dicts by default
    users = engine.fetch_all("SELECT * FROM users WHERE active = 1")
    print(f"fetch_all result ({len(users)} rows):")
    for user in users:
        print(f"  - {user['name']} ({user['email']})")
    print()

    # scalar: a single value
    count = engine.select("SELECT COUNT(*) FROM users", mode="scalar")
    print(f"scalar result: {count} total users\n")

    # IN lists
    ids = [1, 3]
    names = engine.fetch_all(
        f"SELECT name FROM users WHERE id IN ({placeholders(ids)})", ids, mode="col"
    )
    print(f"IN ({placeholders(ids)}): {names}\n")

    # Result handles: read rows one at a time
    with engine.execute("SELECT id, name FROM users ORDER BY id") as result:
        print(f"columns: {result.column_names}")
        for row in result.iter_rows("num"):
            print(f"  {row}")

    # Clean up
    engine.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
