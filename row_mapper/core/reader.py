"""Live result reader.

A RowReader owns an open cursor and the pooled connection behind it. The
caller must close it on every path, preferably with ``with``:

    with engine.query_reader("SELECT * FROM devices") as reader:
        for row in reader:
            ...

Exhausting the reader does not close it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

from row_mapper.mapping.protocol import Mapper, RawRow
from row_mapper.mapping.types import NO_VALUE

logger = logging.getLogger(__name__)

T = TypeVar("T")


def cursor_columns(cursor: Any) -> tuple[str, ...]:
    if cursor.description is None:
        return ()
    return tuple(desc[0] for desc in cursor.description)


def to_raw_row(columns: tuple[str, ...], row: Any) -> RawRow:
    """Build a RawRow from a tuple-like or dict-like driver row."""
    if isinstance(row, dict):
        return RawRow(columns, tuple(row.values()))
    return RawRow(columns, tuple(row))


class RowReader(Generic[T]):
    """Forward-only iterator over mapped rows of an open cursor."""

    def __init__(
        self,
        cursor: Any,
        mapper: Mapper[T],
        release: Callable[[], None],
    ) -> None:
        self._cursor = cursor
        self._mapper = mapper
        self._release = release
        self._columns = cursor_columns(cursor)
        self._closed = False

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self._closed:
            raise StopIteration
        while True:
            row = self._cursor.fetchone()
            if row is None:
                raise StopIteration
            item = self._mapper.map_one(to_raw_row(self._columns, row))
            if item is not NO_VALUE:
                return item

    def close(self) -> None:
        """Close the cursor and hand the connection back to the pool."""
        if self._closed:
            return
        self._closed = True
        try:
            self._cursor.close()
        finally:
            self._release()
        logger.debug("Reader closed")

    def __enter__(self) -> RowReader[T]:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
