"""
Example 03: Type Mappings

This example demonstrates registering per-type coercion overrides that apply
to outgoing parameters and incoming record fields.
"""

import tempfile
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from row_mapper import ConnectionConfig, Engine, TypeMappings


@dataclass
class Invoice:
    id: int = 0
    total: Decimal = Decimal(0)


def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    mappings = TypeMappings()
    # sqlite3 has no Decimal type: store text, read it back as Decimal
    mappings.set(Decimal, inbound=Decimal, outbound=str)

    config = ConnectionConfig(driver="sqlite", database=db_path, pool_size=1)
    engine = Engine.from_config(config, mappings)
    engine.execute("CREATE TABLE invoices (id INTEGER PRIMARY KEY, total TEXT)")
    engine.repeat_command(
        "INSERT INTO invoices (total) VALUES (:total)",
        {"total": Decimal("19.99")},
        {"total": Decimal("0.10")},
    )

    print("=== Type Mappings ===\n")
    invoices = engine.select("SELECT * FROM invoices", into=Invoice)
    for invoice in invoices:
        print(f"  - {invoice}")
    print(f"\nsum: {sum(i.total for i in invoices)}")

    engine.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
