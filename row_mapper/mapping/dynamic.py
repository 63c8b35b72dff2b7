"""Dynamic row wrapper.

A DynamicRow is an immutable, ordered mapping from normalized column name to
value. Lookups normalize the requested name the same way, so
``row["StringCol"]``, ``row["stringcol"]`` and ``row.get("STRING_COL")`` all
reach the same entry.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from row_mapper.core.exceptions import DuplicateColumnError
from row_mapper.mapping.names import normalize_name
from row_mapper.mapping.protocol import RawRow
from row_mapper.mapping.types import is_null


class DynamicRow(Mapping[str, Any]):
    """Case- and punctuation-insensitive view of one result row."""

    __slots__ = ("_values",)

    def __init__(self, items: Iterable[tuple[str, Any]] = ()) -> None:
        values: dict[str, Any] = {}
        for name, value in items:
            key = normalize_name(name)
            if key in values:
                raise DuplicateColumnError(key)
            values[key] = None if is_null(value) else value
        self._values = values

    def __getitem__(self, name: str) -> Any:
        if not isinstance(name, str):
            raise KeyError(name)
        return self._values[normalize_name(name)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"DynamicRow({self._values!r})"


class DynamicRowMapper:
    """Maps each row to a DynamicRow."""

    def map_one(self, row: RawRow) -> DynamicRow:
        return DynamicRow(row.items())

    def map_many(self, rows: list[RawRow]) -> list[DynamicRow]:
        return [self.map_one(row) for row in rows]
