"""Mapper selection by destination type."""

from __future__ import annotations

from typing import Any

from row_mapper.mapping.dynamic import DynamicRow, DynamicRowMapper
from row_mapper.mapping.model import ModelMapper
from row_mapper.mapping.protocol import Mapper
from row_mapper.mapping.registry import TypeMappings
from row_mapper.mapping.scalar import ScalarMapper
from row_mapper.mapping.types import is_scalar_target


def mapper_for(target: Any, type_mappings: TypeMappings | None = None) -> Mapper[Any]:
    """Return a fresh mapper for *target*.

    * ``None`` or ``DynamicRow`` -> DynamicRowMapper
    * numbers, bool, Char, enums, str, dates -> ScalarMapper (column 0 only)
    * anything else -> ModelMapper
    """
    if target is None or target is DynamicRow:
        return DynamicRowMapper()
    if is_scalar_target(target):
        return ScalarMapper(target)
    return ModelMapper(target, type_mappings)
