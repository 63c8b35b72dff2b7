"""Contract tests for adapter protocol compliance."""

from __future__ import annotations

import datetime
import sqlite3

import numpy as np
import pytest

from row_mapper.adapters.protocol import SyncAdapter
from row_mapper.adapters.sqlite import SqliteSyncAdapter
from row_mapper.core.command import Command
from row_mapper.core.connection import ConnectionConfig, ConnectionManager
from row_mapper.core.exceptions import AdapterError, ConnectionError, PoolError  # noqa: A004


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


class TestSqliteSyncAdapterProtocol:
    def test_implements_sync_protocol(self) -> None:
        adapter = SqliteSyncAdapter()
        assert isinstance(adapter, SyncAdapter)

    def test_paramstyle(self) -> None:
        adapter = SqliteSyncAdapter()
        assert adapter.paramstyle == "named"

    def test_create_command_has_parameter_collection(self) -> None:
        command = SqliteSyncAdapter().create_command("SELECT :x")
        assert command == Command("SELECT :x", {})

    def test_lifecycle(self, sqlite_config: ConnectionConfig) -> None:
        adapter = SqliteSyncAdapter()
        pool = adapter.create_pool(sqlite_config)
        assert len(pool) == 1

        conn = adapter.acquire_connection(pool)
        assert conn is not None

        cursor = adapter.execute(conn, "SELECT 1 AS val")
        row = cursor.fetchone()
        assert row["val"] == 1

        adapter.release_connection(conn, pool)
        assert len(pool) == 1

        adapter.close_pool(pool)
        assert len(pool) == 0

    def test_empty_pool(self) -> None:
        with pytest.raises(PoolError):
            SqliteSyncAdapter().acquire_connection([])

    def test_unreachable_database(self, tmp_path) -> None:
        adapter = SqliteSyncAdapter()
        config = ConnectionConfig(driver="sqlite", database=str(tmp_path / "missing" / "x.db"))
        with pytest.raises(ConnectionError, match="Cannot open SQLite database"):
            adapter.create_pool(config)

    def test_numpy_and_date_round_trip(self, sqlite_config: ConnectionConfig) -> None:
        adapter = SqliteSyncAdapter()
        pool = adapter.create_pool(sqlite_config)
        conn = adapter.acquire_connection(pool)
        try:
            conn.execute("CREATE TABLE t (n INTEGER, f REAL, d DATE, ts DATETIME)")
            adapter.execute(
                conn,
                "INSERT INTO t VALUES (:n, :f, :d, :ts)",
                {
                    "n": np.int32(7),
                    "f": np.float32(0.5),
                    "d": datetime.date(2024, 2, 29),
                    "ts": datetime.datetime(2024, 2, 29, 13, 45, 1),
                },
            )
            row = adapter.execute(conn, "SELECT n, f, d, ts FROM t").fetchone()
            assert tuple(row) == (
                7,
                0.5,
                datetime.date(2024, 2, 29),
                datetime.datetime(2024, 2, 29, 13, 45, 1),
            )
        finally:
            adapter.release_connection(conn, pool)
            adapter.close_pool(pool)

    def test_rows_are_sqlite_rows(self, sqlite_config: ConnectionConfig) -> None:
        adapter = SqliteSyncAdapter()
        pool = adapter.create_pool(sqlite_config)
        conn = adapter.acquire_connection(pool)
        assert conn.row_factory is sqlite3.Row
        adapter.release_connection(conn, pool)
        adapter.close_pool(pool)


# --- PostgreSQL protocol compliance ---


class TestPostgresqlSyncAdapterProtocol:
    def test_implements_sync_protocol(self) -> None:
        from row_mapper.adapters.postgresql import PostgresqlSyncAdapter

        adapter = PostgresqlSyncAdapter()
        assert isinstance(adapter, SyncAdapter)

    def test_paramstyle(self) -> None:
        from row_mapper.adapters.postgresql import PostgresqlSyncAdapter

        assert PostgresqlSyncAdapter().paramstyle == "pyformat"

    @pytest.mark.parametrize("scalar", [np.int32(-1), np.int64(2**63 - 1), np.float32(0.5)])
    def test_driver_dumps_numpy_scalars(self, scalar: object) -> None:
        psycopg = pytest.importorskip("psycopg")
        from psycopg.adapt import PyFormat

        assert psycopg.adapters.get_dumper(type(scalar), PyFormat.AUTO) is not None

    def test_conninfo(self) -> None:
        from row_mapper.adapters.postgresql import _build_conninfo

        config = ConnectionConfig(
            driver="postgresql", host="127.0.0.1", port=26299, user="root", database="testdb"
        )
        assert _build_conninfo(config) == "host=127.0.0.1 port=26299 user=root dbname=testdb"

    @pytest.mark.parametrize(
        ("sql", "expected"),
        [
            ("SELECT * FROM t WHERE id = :id", "SELECT * FROM t WHERE id = %(id)s"),
            ("SELECT :a, :b_2", "SELECT %(a)s, %(b_2)s"),
            ("SELECT value::integer FROM t WHERE id = :id", "SELECT value::integer FROM t WHERE id = %(id)s"),
            ("SELECT ('Hello, :name ' || :para)", "SELECT ('Hello, :name ' || %(para)s)"),
            ("SELECT 'it''s :x', :y", "SELECT 'it''s :x', %(y)s"),
            ("SELECT * FROM t WHERE name LIKE 'a%' AND id = :id", "SELECT * FROM t WHERE name LIKE 'a%%' AND id = %(id)s"),
            ("SELECT 10 % 3", "SELECT 10 %% 3"),
            ("SELECT 1", "SELECT 1"),
        ],
    )
    def test_create_command_rewrites_placeholders(self, sql: str, expected: str) -> None:
        from row_mapper.adapters.postgresql import PostgresqlSyncAdapter

        assert PostgresqlSyncAdapter().create_command(sql).sql == expected


class TestConnectionManager:
    def test_unknown_driver(self) -> None:
        with pytest.raises(AdapterError, match="Unsupported database driver"):
            ConnectionManager(ConnectionConfig(driver="db2", database="x"))

    def test_driver_name_is_case_insensitive(self) -> None:
        manager = ConnectionManager(ConnectionConfig(driver="SQLite", database=":memory:"))
        assert isinstance(manager.adapter, SqliteSyncAdapter)

    def test_acquire_and_release(self, sqlite_config: ConnectionConfig) -> None:
        manager = ConnectionManager(sqlite_config)
        conn = manager.acquire()
        with pytest.raises(PoolError):
            manager.acquire()
        manager.release(conn)
        with manager.get_connection() as again:
            assert again is conn
        manager.close_pool()
