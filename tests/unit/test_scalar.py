"""Unit tests for the scalar coercion path."""

from __future__ import annotations

import datetime
from enum import Enum, IntEnum

import numpy as np
import pytest

from row_mapper.core.exceptions import CoercionError
from row_mapper.mapping.protocol import RawRow
from row_mapper.mapping.scalar import (
    SCALAR_CONVERSIONS,
    ScalarMapper,
    coerce_scalar,
    convert_primitive,
)
from row_mapper.mapping.types import DB_NULL, NO_VALUE, Char


class Status(IntEnum):
    ACTIVE = 1
    DISABLED = 2


class Shade(Enum):
    LIGHT = 1
    DARK = 2


SOURCES = [np.int8, np.uint8, np.int16, np.int32, np.int64, np.float32, np.float64]
NUMERIC_TARGETS = [
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
]


class TestConversionTable:
    @pytest.mark.parametrize("source", SOURCES)
    @pytest.mark.parametrize("target", NUMERIC_TARGETS + [bool, Char])
    def test_matrix_is_complete(self, source: type, target: type) -> None:
        assert (source, target) in SCALAR_CONVERSIONS

    def test_strings_are_outside_the_matrix(self) -> None:
        assert convert_primitive("2", np.int32) is NO_VALUE

    def test_bool_source_is_outside_the_matrix(self) -> None:
        assert convert_primitive(True, np.int32) is NO_VALUE


class TestNarrowingAndWidening:
    def test_int64_to_uint32(self) -> None:
        result = coerce_scalar(np.int64(2), np.uint32)
        assert result == 2
        assert result.dtype == np.uint32

    def test_python_int_counts_as_int64(self) -> None:
        result = coerce_scalar(2, np.int32)
        assert result == 2
        assert result.dtype == np.int32

    def test_twos_complement_truncation(self) -> None:
        assert coerce_scalar(np.int64(2**32 + 5), np.int32) == 5
        assert coerce_scalar(np.int32(-1), np.uint16) == 65535
        assert coerce_scalar(np.int16(300), np.uint8) == 44
        assert coerce_scalar(np.int64(-1), np.uint64) == 2**64 - 1

    def test_widening(self) -> None:
        result = coerce_scalar(np.int8(-5), np.int64)
        assert result == -5
        assert result.dtype == np.int64

    def test_float_truncates_toward_zero(self) -> None:
        assert coerce_scalar(2.9, np.int32) == 2
        assert coerce_scalar(np.float32(-2.9), np.int16) == -2

    def test_int_to_float(self) -> None:
        result = coerce_scalar(np.int16(3), np.float32)
        assert result == 3.0
        assert result.dtype == np.float32

    def test_python_targets(self) -> None:
        assert coerce_scalar(np.int32(7), int) == 7
        assert type(coerce_scalar(np.int32(7), int)) is int
        assert type(coerce_scalar(np.int32(7), float)) is float

    def test_too_large_for_int64_source(self) -> None:
        assert coerce_scalar(2**70, np.int32) is NO_VALUE


class TestBooleanQuirk:
    @pytest.mark.parametrize(("value", "expected"), [(0, False), (1, True), (-3, True), (255, True)])
    def test_integer_source(self, value: int, expected: bool) -> None:
        assert coerce_scalar(np.int32(value), bool) is expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.0, False), (0.5, False), (-0.99, False), (1.0, True), (1.5, True), (-1.0, True)],
    )
    def test_float_source(self, value: float, expected: bool) -> None:
        assert coerce_scalar(value, bool) is expected

    def test_bool_passes_through(self) -> None:
        assert coerce_scalar(True, bool) is True


class TestChar:
    def test_from_integer(self) -> None:
        result = coerce_scalar(65, Char)
        assert result == "A"
        assert isinstance(result, Char)

    def test_wraps_to_sixteen_bits(self) -> None:
        assert coerce_scalar(0x10041, Char) == "A"


class TestOtherScalars:
    def test_enum_by_value(self) -> None:
        assert coerce_scalar(2, Status) is Status.DISABLED
        assert coerce_scalar(np.int64(1), Shade) is Shade.LIGHT

    def test_enum_does_not_parse_names(self) -> None:
        with pytest.raises(CoercionError):
            coerce_scalar("ACTIVE", Status)

    def test_enum_unknown_value(self) -> None:
        with pytest.raises(CoercionError):
            coerce_scalar(99, Status)

    def test_string(self) -> None:
        assert coerce_scalar(12, str) == "12"
        assert coerce_scalar("Hello, world", str) == "Hello, world"

    def test_date_direct_match(self) -> None:
        value = datetime.datetime(2024, 5, 6, 7, 8)
        assert coerce_scalar(value, datetime.datetime) is value

    def test_date_from_string_is_not_parsed(self) -> None:
        assert coerce_scalar("2024-05-06", datetime.date) is NO_VALUE

    @pytest.mark.parametrize("target", [np.int32, str, Status, datetime.date])
    def test_null_has_no_value(self, target: type) -> None:
        assert coerce_scalar(None, target) is NO_VALUE
        assert coerce_scalar(DB_NULL, target) is NO_VALUE


class TestScalarMapper:
    def test_reads_only_first_column(self) -> None:
        mapper = ScalarMapper(np.int32)
        row = RawRow(("a", "b"), (2, 99))
        assert mapper.map_one(row) == 2

    def test_map_many_skips_unconvertible_rows(self) -> None:
        mapper = ScalarMapper(np.int32)
        rows = [RawRow(("v",), (1,)), RawRow(("v",), ("x",)), RawRow(("v",), (None,)), RawRow(("v",), (3,))]
        assert mapper.map_many(rows) == [1, 3]
