"""
Example 02: Model Mapping

This example demonstrates mapping query results to dataclasses, Pydantic
models and scalar types, and streaming them through a live reader.
"""

import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np
from pydantic import BaseModel

from row_mapper import ConnectionConfig, Engine


class Role(Enum):
    GUEST = 0
    MEMBER = 1
    ADMIN = 2


@dataclass
class UserDataclass:
    """User model using dataclass"""

    id: int = 0
    user_name: str = ""
    role: Role = Role.GUEST


class UserPydantic(BaseModel):
    """User model using Pydantic"""

    id: int = 0
    user_name: str = ""
    role: Role = Role.GUEST


def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    engine = Engine.from_config(ConnectionConfig(driver="sqlite", database=db_path, pool_size=2))
    engine.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, UserName TEXT, role INTEGER)")
    engine.repeat_command(
        "INSERT INTO users (UserName, role) VALUES (:user_name, :role)",
        UserDataclass(user_name="Alice", role=Role.ADMIN),
        UserDataclass(user_name="Bob", role=Role.MEMBER),
    )

    print("=== Model Mapping ===\n")

    # Column "UserName" fills field "user_name": both normalize to "username"
    for user in engine.select("SELECT * FROM users", into=UserDataclass):
        print(f"dataclass: {user}")

    for user in engine.select("SELECT * FROM users", into=UserPydantic):
        print(f"pydantic:  {user!r}")

    ids = engine.select("SELECT id FROM users", into=np.int16)
    print(f"\nscalar ids: {ids}")

    print("\nreader:")
    with engine.query_reader("SELECT * FROM users ORDER BY id DESC", into=UserDataclass) as reader:
        for user in reader:
            print(f"  - {user.user_name} is {user.role.name}")

    engine.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
