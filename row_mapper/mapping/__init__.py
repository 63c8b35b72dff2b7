"""Mapping layer - coerce row values into typed objects."""

from __future__ import annotations

from row_mapper.mapping.coerce import coerce_field
from row_mapper.mapping.dynamic import DynamicRow, DynamicRowMapper
from row_mapper.mapping.factory import mapper_for
from row_mapper.mapping.fields import FieldSetter, build_setter_map, describe_fields
from row_mapper.mapping.model import ModelMapper
from row_mapper.mapping.names import normalize_name
from row_mapper.mapping.protocol import Mapper, RawRow
from row_mapper.mapping.registry import TypeMappings
from row_mapper.mapping.scalar import SCALAR_CONVERSIONS, ScalarMapper, coerce_scalar
from row_mapper.mapping.types import DB_NULL, NO_VALUE, Char

__all__ = [
    "Mapper",
    "RawRow",
    "ModelMapper",
    "ScalarMapper",
    "DynamicRow",
    "DynamicRowMapper",
    "FieldSetter",
    "TypeMappings",
    "mapper_for",
    "describe_fields",
    "build_setter_map",
    "coerce_field",
    "coerce_scalar",
    "normalize_name",
    "SCALAR_CONVERSIONS",
    "Char",
    "DB_NULL",
    "NO_VALUE",
]
