"""Single-column scalar coercion.

Used when the destination of a select is a primitive number, bool, Char,
enum, string or date. Only column 0 of each row is read.

Numeric conversions go through an explicit table keyed by
``(source type, destination type)``. Pairs outside the table produce
``NO_VALUE`` and the row contributes nothing to the result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

import numpy as np

from row_mapper.core.exceptions import CoercionError
from row_mapper.mapping.protocol import RawRow
from row_mapper.mapping.types import (
    NO_VALUE,
    Char,
    enum_value_type,
    is_enum_type,
    is_null,
    source_type_name,
    type_name,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_INTEGER_SOURCES: tuple[type, ...] = (np.int8, np.uint8, np.int16, np.int32, np.int64)
_FLOAT_SOURCES: tuple[type, ...] = (np.float32, np.float64)
_NUMERIC_TARGETS: tuple[type, ...] = (
    np.int32,
    np.uint32,
    np.int64,
    np.uint64,
    np.int16,
    np.uint16,
    np.int8,
    np.uint8,
    np.float32,
    np.float64,
)

# Python's builtin numbers stand in for the 64-bit numpy types.
_SOURCE_ALIASES: dict[type, type] = {int: np.int64, float: np.float64}
_TARGET_ALIASES: dict[type, type] = {int: np.int64, float: np.float64}


def _cast_to(target: type) -> Callable[[Any, type], Any]:
    def cast(value: Any, source: type) -> Any:
        return np.asarray(value, dtype=source).astype(target)[()]

    return cast


def _integer_truth(value: Any, source: type) -> bool:
    return bool(value != 0)


def _float_truth(value: Any, source: type) -> bool:
    # false only strictly inside (-1, 1)
    return not (value < 1 and value > -1)


def _to_char(value: Any, source: type) -> Char:
    code = int(np.asarray(value, dtype=source).astype(np.int64)[()])
    return Char(chr(code & 0xFFFF))


def _build_conversions() -> dict[tuple[type, type], Callable[[Any, type], Any]]:
    table: dict[tuple[type, type], Callable[[Any, type], Any]] = {}
    for source in _INTEGER_SOURCES + _FLOAT_SOURCES:
        for target in _NUMERIC_TARGETS:
            table[source, target] = _cast_to(target)
        table[source, Char] = _to_char
    for source in _INTEGER_SOURCES:
        table[source, bool] = _integer_truth
    for source in _FLOAT_SOURCES:
        table[source, bool] = _float_truth
    return table


SCALAR_CONVERSIONS = _build_conversions()


def convert_primitive(value: Any, target: type) -> Any:
    """Look up and apply the matrix conversion, or return ``NO_VALUE``."""
    source = _SOURCE_ALIASES.get(type(value), type(value))
    matrix_target = _TARGET_ALIASES.get(target, target)
    converter = SCALAR_CONVERSIONS.get((source, matrix_target))
    if converter is None:
        return NO_VALUE
    try:
        result = converter(value, source)
    except OverflowError:
        # value does not fit the source width it was classified as
        return NO_VALUE
    if matrix_target is not target:
        return target(result)
    return result


def coerce_scalar(value: Any, target: type) -> Any:
    """Coerce one raw column value to a scalar destination type.

    Returns ``NO_VALUE`` for nulls and for conversions the matrix does not
    define. Enum conversion failures raise ``CoercionError``.
    """
    if is_null(value):
        return NO_VALUE
    if type(value) is target:
        return value
    if is_enum_type(target):
        try:
            return target(enum_value_type(target)(value))
        except (TypeError, ValueError) as e:
            raise CoercionError(
                source_type_name(value), type_name(target), type_name(target), "value", str(e)
            ) from e
    if target is str:
        return str(value)
    if isinstance(value, target) and not isinstance(value, bool):
        return value
    return convert_primitive(value, target)


class ScalarMapper(Generic[T]):
    """Maps column 0 of each row to a scalar destination type."""

    def __init__(self, target: type[T]) -> None:
        self._target = target

    def map_one(self, row: RawRow) -> T:
        """Coerce the first column; may return ``NO_VALUE``."""
        if not row.values:
            return NO_VALUE  # type: ignore[no-any-return]
        return coerce_scalar(row.values[0], self._target)  # type: ignore[no-any-return]

    def map_many(self, rows: list[RawRow]) -> list[T]:
        results: list[T] = []
        for row in rows:
            item = self.map_one(row)
            if item is NO_VALUE:
                logger.debug(
                    "Skipping row: %s has no conversion to %s",
                    source_type_name(row.values[0] if row.values else None),
                    type_name(self._target),
                )
                continue
            results.append(item)
        return results
