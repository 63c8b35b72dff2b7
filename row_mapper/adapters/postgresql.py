"""PostgreSQL adapter using psycopg (3.2+, which dumps numpy scalars natively)."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

from row_mapper.core.command import Command
from row_mapper.core.connection import ConnectionConfig
from row_mapper.core.exceptions import ConnectionError, PoolError  # noqa: A004


# A quoted literal, a bare percent sign, or a :name placeholder that is not
# part of a ::typecast or a word.
_SQL_TOKEN = re.compile(r"'(?:[^']|'')*'|%|(?<![:\w]):([A-Za-z_]\w*)")


def _pyformat_token(match: re.Match[str]) -> str:
    name = match.group(1)
    if name is not None:
        return f"%({name})s"
    return match.group(0).replace("%", "%%")


@lru_cache(maxsize=256)
def to_pyformat(sql: str) -> str:
    """Rewrite `:name` placeholders as `%(name)s` and escape literal `%`.

    Placeholders inside quoted literals are left alone.
    """
    return _SQL_TOKEN.sub(_pyformat_token, sql)


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    parts.append(f"dbname={config.database}")
    return " ".join(parts)


class PostgresqlSyncAdapter:
    """Synchronous PostgreSQL adapter using psycopg."""

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    def create_pool(self, config: ConnectionConfig) -> list[Any]:
        import psycopg

        conninfo = _build_conninfo(config)
        pool: list[Any] = []
        for _ in range(config.pool_size):
            try:
                conn = psycopg.connect(conninfo, **config.extra)
            except psycopg.Error as e:
                self.close_pool(pool)
                raise ConnectionError(f"Cannot connect to PostgreSQL: {e}") from e
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[Any]) -> Any:
        if not pool:
            raise PoolError("No connections available in pool")
        return pool.pop()

    def release_connection(self, connection: Any, pool: list[Any]) -> None:
        pool.append(connection)

    def close_pool(self, pool: list[Any]) -> None:
        for conn in pool:
            conn.close()
        pool.clear()

    def create_command(self, sql: str) -> Command:
        return Command(to_pyformat(sql))

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return connection.execute(sql, params or None)
