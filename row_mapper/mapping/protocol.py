"""Mapper protocol.

All mappers implement this interface. The Engine hands every result row to
map_one as a RawRow and calls map_many for materialized results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RawRow:
    """Column names and values of one result row, in cursor order."""

    columns: tuple[str, ...]
    values: tuple[Any, ...]

    def items(self) -> zip[tuple[str, Any]]:
        return zip(self.columns, self.values, strict=True)


class Mapper(Protocol[T]):
    """Base mapper protocol."""

    def map_one(self, row: RawRow) -> T:
        """Map a single row to a target object."""
        ...

    def map_many(self, rows: list[RawRow]) -> list[T]:
        """Map multiple rows to a list of target objects."""
        ...
