"""Outbound parameter normalization.

Turns caller-supplied parameters into ParameterBindings whose values the
DB-API driver can bind without further help:

* ``None`` -> explicit database null
* TypeMappings outbound override for the value's type, applied first
* enum members -> their underlying (integer) value
* byte sequences (bytearray, memoryview, uint8 arrays, lists of uint8) -> bytes
* uint32 / uint64 -> int32 / int64, same bit pattern
* timezone-aware datetimes and times -> naive wall-clock value
* other non-string iterables -> list
* everything else unchanged

Parameters may be a mapping or any structured value (Pydantic model,
dataclass, named tuple, plain object) whose fields are read by name.
"""

from __future__ import annotations

import array
import dataclasses
import datetime
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from pydantic import BaseModel

from row_mapper.core.enums import DbType
from row_mapper.mapping.registry import TypeMappings
from row_mapper.mapping.types import DB_NULL, is_null

logger = logging.getLogger(__name__)

_BYTE_TYPECODES = frozenset("bB")
_BYTE_DTYPES = (np.dtype(np.uint8), np.dtype(np.int8))
_UNSIGNED_NARROWING: dict[type, type] = {np.uint32: np.int32, np.uint64: np.int64}


@dataclass(frozen=True)
class ParameterBinding:
    """One named parameter, before and after normalization."""

    name: str
    raw_value: Any
    value: Any
    db_type: DbType = DbType.OBJECT

    @property
    def is_null(self) -> bool:
        return self.db_type is DbType.NULL

    @property
    def driver_value(self) -> Any:
        """Value handed to the DB-API driver (``None`` for database null)."""
        return None if self.is_null else self.value


def iter_parameters(params: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(name, value)`` pairs from a mapping or a structured value."""
    if params is None:
        return
    if isinstance(params, Mapping):
        yield from params.items()
    elif isinstance(params, BaseModel):
        for name in type(params).model_fields:
            yield name, getattr(params, name)
    elif dataclasses.is_dataclass(params) and not isinstance(params, type):
        for f in dataclasses.fields(params):
            yield f.name, getattr(params, f.name)
    elif isinstance(params, tuple) and hasattr(params, "_asdict"):
        yield from params._asdict().items()
    else:
        for name, value in vars(params).items():
            if not name.startswith("_"):
                yield name, value


def _is_byte_sequence(value: Any) -> bool:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return True
    if isinstance(value, array.array):
        return value.typecode in _BYTE_TYPECODES
    if isinstance(value, np.ndarray):
        return value.dtype in _BYTE_DTYPES
    return False


def _materialize(value: Iterable[Any]) -> Any:
    """List the items of an untyped sequence, typed by its first element.

    A sequence starting with a numpy uint8 is treated as bytes. Sequences
    mixing element types are not supported.
    """
    if isinstance(value, np.ndarray):
        return value.tolist()
    items = list(value)
    if items and isinstance(items[0], np.uint8):
        return bytes(items)
    return items


def normalize_value(value: Any, type_mappings: TypeMappings) -> Any:
    """Return the driver-ready form of *value*, or ``DB_NULL``."""
    if is_null(value):
        return DB_NULL

    outbound = type_mappings.outbound_for(type(value))
    if outbound is not None:
        value = outbound(value)
        if is_null(value):
            return DB_NULL

    if isinstance(value, Enum):
        return value.value
    if _is_byte_sequence(value):
        return value.tobytes() if isinstance(value, np.ndarray) else bytes(value)
    narrowed = _UNSIGNED_NARROWING.get(type(value))
    if narrowed is not None:
        return np.asarray(value).astype(narrowed)[()]
    if isinstance(value, (datetime.datetime, datetime.time)):
        return value.replace(tzinfo=None) if value.tzinfo is not None else value
    if isinstance(value, list):
        if value and isinstance(value[0], np.uint8):
            return bytes(value)
        return value
    if isinstance(value, Iterable) and not isinstance(value, (str, Mapping)):
        return _materialize(value)
    return value


def bind_parameters(params: Any, type_mappings: TypeMappings) -> list[ParameterBinding]:
    """Normalize every named parameter in *params*."""
    bindings: list[ParameterBinding] = []
    for name, raw in iter_parameters(params):
        value = normalize_value(raw, type_mappings)
        if value is DB_NULL:
            bindings.append(ParameterBinding(name, raw, DB_NULL, DbType.NULL))
        else:
            bindings.append(ParameterBinding(name, raw, value))
    logger.debug("Bound %d parameters", len(bindings))
    return bindings
