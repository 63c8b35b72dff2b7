"""RowMapper - value coercion between DB-API rows and typed Python objects."""

from __future__ import annotations

from row_mapper.core.connection import ConnectionConfig, ConnectionManager
from row_mapper.core.engine import Engine
from row_mapper.core.enums import DatabaseBackend, DbType
from row_mapper.core.exceptions import (
    AdapterError,
    CoercionError,
    ConnectionError,  # noqa: A004
    DuplicateColumnError,
    EnumParseError,
    ExecutionError,
    MappingError,
    MissingConstructorError,
    ParameterSetupError,
    PoolError,
    QueryExecutionError,
    RowMapperError,
    TargetTypeError,
)
from row_mapper.core.params import ParameterBinding, bind_parameters
from row_mapper.core.reader import RowReader
from row_mapper.mapping import (
    DB_NULL,
    NO_VALUE,
    Char,
    DynamicRow,
    ModelMapper,
    ScalarMapper,
    TypeMappings,
    normalize_name,
)

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    # Engine
    "Engine",
    "RowReader",
    # Parameters
    "ParameterBinding",
    "bind_parameters",
    # Mapping
    "ModelMapper",
    "ScalarMapper",
    "DynamicRow",
    "TypeMappings",
    "normalize_name",
    "Char",
    "DB_NULL",
    "NO_VALUE",
    # Enums
    "DatabaseBackend",
    "DbType",
    # Exceptions
    "RowMapperError",
    "ExecutionError",
    "ParameterSetupError",
    "QueryExecutionError",
    "MappingError",
    "CoercionError",
    "MissingConstructorError",
    "EnumParseError",
    "DuplicateColumnError",
    "TargetTypeError",
    "AdapterError",
    "ConnectionError",
    "PoolError",
]
