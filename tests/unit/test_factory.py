"""Tests for mapper selection by destination type."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum

import numpy as np
import pytest

from row_mapper.mapping.dynamic import DynamicRow, DynamicRowMapper
from row_mapper.mapping.factory import mapper_for
from row_mapper.mapping.model import ModelMapper
from row_mapper.mapping.registry import TypeMappings
from row_mapper.mapping.scalar import ScalarMapper
from row_mapper.mapping.types import Char


class Color(Enum):
    RED = 1


@dataclass
class Point:
    x: int = 0
    y: int = 0


@pytest.mark.parametrize("target", [None, DynamicRow])
def test_dynamic_targets(target) -> None:
    assert isinstance(mapper_for(target), DynamicRowMapper)


@pytest.mark.parametrize(
    "target",
    [int, float, bool, str, Char, np.int8, np.uint8, np.float32, Color, datetime.date, datetime.datetime],
)
def test_scalar_targets(target) -> None:
    assert isinstance(mapper_for(target), ScalarMapper)


def test_record_target_shares_type_mappings(make_row) -> None:
    mappings = TypeMappings()
    mappings.set(int, inbound=lambda v: int(v) * 10)
    mapper = mapper_for(Point, mappings)
    assert isinstance(mapper, ModelMapper)
    assert mapper.map_one(make_row(x=1, y=2)) == Point(10, 20)
