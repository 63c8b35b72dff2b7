"""Query execution engine.

The Engine normalizes parameters, executes SQL through the adapter and maps
result rows onto the caller's destination type.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from row_mapper.core.command import Command
from row_mapper.core.connection import ConnectionConfig, ConnectionManager
from row_mapper.core.exceptions import ParameterSetupError, QueryExecutionError
from row_mapper.core.params import bind_parameters
from row_mapper.core.reader import RowReader, cursor_columns, to_raw_row
from row_mapper.mapping.dynamic import DynamicRow, DynamicRowMapper
from row_mapper.mapping.factory import mapper_for
from row_mapper.mapping.protocol import Mapper, RawRow
from row_mapper.mapping.registry import TypeMappings
from row_mapper.mapping.types import is_null

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LABEL_WIDTH = 60


def _label(sql: str) -> str:
    """Short one-line form of *sql* for error messages."""
    text = " ".join(sql.split())
    if len(text) > _LABEL_WIDTH:
        return text[: _LABEL_WIDTH - 3] + "..."
    return text


def _rollback(conn: Any) -> None:
    """End the connection's open transaction so it goes back to the pool clean."""
    try:
        conn.rollback()
    except Exception:
        logger.warning("Rollback failed; connection returned to the pool as is", exc_info=True)


def _fetch_raw_rows(cursor: Any) -> list[RawRow]:
    columns = cursor_columns(cursor)
    if not columns:
        return []
    return [to_raw_row(columns, row) for row in cursor.fetchall()]


class Engine:
    """Synchronous query execution engine.

    Args:
        connection_manager: Source of pooled connections and the adapter.
        type_mappings: Per-type coercion overrides applied to parameters
            and to mapped fields. Each engine gets its own when omitted.
    """

    def __init__(
        self,
        connection_manager: ConnectionManager,
        type_mappings: TypeMappings | None = None,
    ) -> None:
        self._connection_manager = connection_manager
        self._type_mappings = type_mappings if type_mappings is not None else TypeMappings()

    @classmethod
    def from_config(
        cls,
        config: ConnectionConfig,
        type_mappings: TypeMappings | None = None,
    ) -> Engine:
        """Create an Engine from a ConnectionConfig.

        Args:
            config: ConnectionConfig instance
            type_mappings: Optional TypeMappings instance

        Returns:
            Engine instance
        """
        return cls(ConnectionManager(config), type_mappings)

    @property
    def type_mappings(self) -> TypeMappings:
        return self._type_mappings

    def _prepare(self, sql: str, params: Any) -> Command:
        adapter = self._connection_manager.adapter
        command = adapter.create_command(sql)
        if command.parameters is None:
            raise ParameterSetupError(type(adapter).__name__)
        for binding in bind_parameters(params, self._type_mappings):
            command.parameters[binding.name] = binding.driver_value
        return command

    def _execute(self, conn: Any, command: Command) -> Any:
        try:
            return self._connection_manager.adapter.execute(
                conn, command.sql, command.parameters
            )
        except Exception as e:
            _rollback(conn)
            raise QueryExecutionError(_label(command.sql), str(e)) from e

    def _fetch(self, sql: str, params: Any) -> list[RawRow]:
        command = self._prepare(sql, params)
        with self._connection_manager.get_connection() as conn:
            cursor = self._execute(conn, command)
            try:
                return _fetch_raw_rows(cursor)
            finally:
                cursor.close()
                _rollback(conn)

    def query_value(self, sql: str, params: Any = None) -> Any:
        """Fetch a single value (first column of first row), or None.

        Also suited to statements without results (DDL); the connection is
        committed either way.
        """
        command = self._prepare(sql, params)
        with self._connection_manager.get_connection() as conn:
            cursor = self._execute(conn, command)
            try:
                columns = cursor_columns(cursor)
                row = cursor.fetchone() if columns else None
            finally:
                cursor.close()
            conn.commit()

        if row is None:
            return None
        values = to_raw_row(columns, row).values
        if not values or is_null(values[0]):
            return None
        return values[0]

    def select(
        self,
        sql: str,
        params: Any = None,
        *,
        into: type[T] | None = None,
        mapper: Mapper[T] | None = None,
    ) -> list[Any]:
        """Fetch all rows mapped onto *into* (or through *mapper*).

        Scalar destinations read column 0 and drop rows without a defined
        conversion; record destinations are filled by normalized column
        name; without a destination every row becomes a DynamicRow.
        """
        if mapper is None:
            mapper = mapper_for(into, self._type_mappings)
        rows = self._fetch(sql, params)
        return mapper.map_many(rows)

    def select_dynamic(self, sql: str, params: Any = None) -> list[DynamicRow]:
        """Fetch all rows as DynamicRows."""
        return DynamicRowMapper().map_many(self._fetch(sql, params))

    def execute(self, sql: str, params: Any = None) -> int:
        """Execute a write statement. Returns affected row count."""
        command = self._prepare(sql, params)
        with self._connection_manager.get_connection() as conn:
            cursor = self._execute(conn, command)
            try:
                conn.commit()
                return int(cursor.rowcount)
            finally:
                cursor.close()

    def repeat_command(self, sql: str, *param_sets: Any) -> int:
        """Run *sql* once per parameter set, committing after each.

        There is no surrounding transaction: if a set fails, the ones before
        it stay committed. Returns the total affected row count.
        """
        total = 0
        with self._connection_manager.get_connection() as conn:
            for index, params in enumerate(param_sets):
                command = self._prepare(sql, params)
                cursor = self._execute(conn, command)
                try:
                    conn.commit()
                    total += max(int(cursor.rowcount), 0)
                finally:
                    cursor.close()
                logger.debug("repeat_command: set %d of %d done", index + 1, len(param_sets))
        return total

    def query_reader(
        self,
        sql: str,
        params: Any = None,
        *,
        into: type[T] | None = None,
    ) -> RowReader[Any]:
        """Open a live reader over the results.

        The reader holds a pooled connection until the caller closes it.
        """
        mapper = mapper_for(into, self._type_mappings)
        command = self._prepare(sql, params)
        conn = self._connection_manager.acquire()
        try:
            cursor = self._execute(conn, command)
        except BaseException:
            self._connection_manager.release(conn)
            raise
        logger.debug("Reader opened for '%s'", _label(sql))
        return RowReader(cursor, mapper, lambda: self._end_read(conn))

    def _end_read(self, conn: Any) -> None:
        _rollback(conn)
        self._connection_manager.release(conn)

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._connection_manager.close_pool()
