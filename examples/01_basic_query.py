"""
Example 01: Basic Query Execution

This example demonstrates scalar values, affected counts, dynamic rows and
batch inserts using RowMapper's Engine.
"""

import tempfile
from pathlib import Path

from row_mapper import ConnectionConfig, Engine


def main():
    # Create a temporary database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    config = ConnectionConfig(driver="sqlite", database=db_path, pool_size=1)
    engine = Engine.from_config(config)

    engine.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            user_name TEXT NOT NULL,
            email TEXT NOT NULL,
            active INTEGER DEFAULT 1
        )
    """)

    print("=== Basic Query Execution ===\n")

    # repeat_command: same statement, one parameter set per call
    inserted = engine.repeat_command(
        "INSERT INTO users (user_name, email, active) VALUES (:name, :email, :active)",
        {"name": "Alice", "email": "alice@example.com", "active": True},
        {"name": "Bob", "email": "bob@example.com", "active": True},
        {"name": "Charlie", "email": "charlie@example.com", "active": False},
    )
    print(f"repeat_command inserted {inserted} rows\n")

    # query_value: first column of the first row
    greeting = engine.query_value("SELECT ('Hello, ' || :name) AS result", {"name": "world"})
    print(f"query_value result: {greeting}")
    count = engine.query_value("SELECT COUNT(*) FROM users")
    print(f"query_value count: {count} total users\n")

    # select_dynamic: rows keyed by normalized column name
    users = engine.select_dynamic("SELECT * FROM users WHERE active = :active", {"active": 1})
    print(f"select_dynamic result ({len(users)} rows):")
    for user in users:
        print(f"  - {user['UserName']} ({user['email']})")
    print()

    # execute: affected row count
    updated = engine.execute("UPDATE users SET active = 1 WHERE active = 0")
    print(f"execute updated {updated} rows")

    engine.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
