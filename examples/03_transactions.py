"""
Example 04: Transactions

This example demonstrates transaction management with automatic rollback on errors.
"""

from row_shape import Engine, ConnectionConfig, TransactionFailure
import tempfile
from pathlib import Path


def main():
    # Set up database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    config = ConnectionConfig(driver="sqlite", database=db_path)
    engine = Engine.from_config(config)

    engine.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE
        )
    """).close()
    engine.execute("""
        CREATE TABLE audit_log (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            action TEXT NOT NULL,
            timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
        )
    """).close()

    create_user = "INSERT INTO users (name, email) VALUES (:name, :email)"
    log_action = "INSERT INTO audit_log (action) VALUES (:action)"
    count_users = "SELECT COUNT(*) FROM users"

    print("=== Transaction Management ===\n")

    # Example 1: Successful transaction
    print("1. Successful transaction:")
    with engine.transaction() as tx:
        tx.insert(create_user, {"name": "Alice", "email": "alice@example.com"})
        tx.insert(log_action, {"action": "user_created"})
        # Commits automatically on exit
    count = engine.select(count_users, mode="scalar")
    print(f"   Users after commit: {count}\n")

    # Example 2: Transaction with rollback on error
    print("2. Transaction with error (automatic rollback):")
    try:
        with engine.transaction() as tx:
            tx.insert(create_user, {"name": "Bob", "email": "bob@example.com"})
            # This will fail due to duplicate email
            tx.insert(create_user, {"name": "Charlie", "email": "alice@example.com"})
    except Exception as e:
        print(f"   Error occurred: {type(e).__name__}")
        print(f"   Transaction was rolled back automatically\n")

    count = engine.select(count_users, mode="scalar")
    print(f"   Users after rollback: {count} (Bob was not added)\n")

    # Example 3: Scripted batch with an affected-row threshold
    print("3. Atomic batch:")
    engine.atomic(
        [create_user, log_action, create_user, log_action],
        [
            {"name": "Dave", "email": "dave@example.com"},
            {"action": "user_created"},
            {"name": "Eve", "email": "eve@example.com"},
            {"action": "user_created"},
        ],
    )
    count = engine.select(count_users, mode="scalar")
    print(f"   Users after batch: {count}\n")

    # Example 4: Batch rejected because a statement changed no rows
    print("4. Atomic batch with a no-op statement:")
    try:
        engine.atomic(
            ["DELETE FROM users WHERE name = ?", "DELETE FROM users WHERE name = ?"],
            [["Eve"], ["Nobody"]],
        )
    except TransactionFailure as e:
        print(f"   {e}")
    count = engine.select(count_users, mode="scalar")
    print(f"   Users after failed batch: {count} (Eve is still there)\n")

    # Example 5: Callback transaction
    print("5. Callback transaction:")

    def rename(tx, old, new):
        return tx.update("UPDATE users SET name = ? WHERE name = ?", [new, old]).affected_rows

    changed = engine.run_in_transaction(rename, "Dave", "David")
    print(f"   Renamed {changed} user\n")

    # Clean up
    engine.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
