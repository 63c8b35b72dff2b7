"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import datetime
import sqlite3
from typing import Any

import dateutil.parser
import numpy as np

from row_mapper.core.command import Command
from row_mapper.core.connection import ConnectionConfig
from row_mapper.core.exceptions import ConnectionError, PoolError  # noqa: A004
from row_mapper.mapping.types import SIZED_FLOATS, SIZED_INTEGERS


def adapt_date_iso(val: datetime.date) -> str:
    """Adapt date to ISO 8601 date."""
    return val.isoformat()


def adapt_datetime_iso(val: datetime.datetime) -> str:
    """Adapt naive datetime to ISO 8601 datetime."""
    return val.isoformat(" ")


def convert_date(val: bytes) -> datetime.date:
    """Convert ISO 8601 date string to date object"""
    return dateutil.parser.isoparse(val.decode()).date()


def convert_datetime(val: bytes) -> datetime.datetime:
    """Convert ISO 8601 datetime string to datetime object"""
    return dateutil.parser.isoparse(val.decode())


def adapt_numpy_int(val: np.integer) -> int:
    """Convert NumPy integer to Python int."""
    return int(val)


def adapt_numpy_float(val: np.floating) -> float:
    """Convert NumPy float to Python float."""
    return float(val)


def register_sqlite_types() -> None:
    """Register date and NumPy scalar adapters.

    Due to SQLite's architecture, adapters are registered globally rather
    than per-connection.
    """
    sqlite3.register_adapter(datetime.date, adapt_date_iso)
    sqlite3.register_adapter(datetime.datetime, adapt_datetime_iso)
    sqlite3.register_converter("date", convert_date)
    sqlite3.register_converter("datetime", convert_datetime)
    sqlite3.register_converter("timestamp", convert_datetime)

    for dtype in SIZED_INTEGERS:
        sqlite3.register_adapter(dtype, adapt_numpy_int)
    for dtype in SIZED_FLOATS:
        sqlite3.register_adapter(dtype, adapt_numpy_float)
    sqlite3.register_adapter(np.bool_, bool)


class SqliteSyncAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "named"

    def create_pool(self, config: ConnectionConfig) -> list[sqlite3.Connection]:
        """Create a 'pool' (list of connections) for SQLite."""
        register_sqlite_types()
        pool: list[sqlite3.Connection] = []
        for _ in range(config.pool_size):
            try:
                conn = sqlite3.connect(
                    config.database,
                    detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
                )
            except sqlite3.Error as e:
                self.close_pool(pool)
                raise ConnectionError(f"Cannot open SQLite database {config.database!r}: {e}") from e
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[sqlite3.Connection]) -> sqlite3.Connection:
        """Acquire a connection from the pool."""
        if not pool:
            raise PoolError("No connections available in pool")
        return pool.pop()

    def release_connection(
        self, connection: sqlite3.Connection, pool: list[sqlite3.Connection]
    ) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[sqlite3.Connection]) -> None:
        """Close all connections in the pool."""
        for conn in pool:
            conn.close()
        pool.clear()

    def create_command(self, sql: str) -> Command:
        return Command(sql)

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        return connection.execute(sql, params or {})
