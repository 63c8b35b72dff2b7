"""Sentinels and type helpers shared by the coercion paths."""

from __future__ import annotations

import collections.abc
import datetime
import types
import typing
from enum import Enum
from typing import Any, Union

import numpy as np


class _Sentinel:
    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False


DB_NULL: Any = _Sentinel("DB_NULL")
"""Explicit database null marker for parameter bindings."""

NO_VALUE: Any = _Sentinel("NO_VALUE")
"""Result of a scalar conversion that has no defined outcome."""


class Char(str):
    """A single UTF-16 code unit, the ``char`` destination of the scalar matrix."""

    __slots__ = ()

    def __new__(cls, value: str = "\0") -> Char:
        if len(value) != 1:
            raise ValueError(f"Char requires exactly one character, got {value!r}")
        return super().__new__(cls, value)


SIZED_INTEGERS: tuple[type, ...] = (
    np.int8,
    np.uint8,
    np.int16,
    np.uint16,
    np.int32,
    np.uint32,
    np.int64,
    np.uint64,
)
SIZED_FLOATS: tuple[type, ...] = (np.float32, np.float64)
DATE_TYPES: tuple[type, ...] = (datetime.date, datetime.datetime, datetime.time)

_UNION_TYPES: tuple[Any, ...] = (Union, types.UnionType)


def is_null(value: Any) -> bool:
    """True for ``None`` and the ``DB_NULL`` marker."""
    return value is None or value is DB_NULL


def type_name(tp: Any) -> str:
    """Readable name for classes and typing constructs alike."""
    if isinstance(tp, type) and typing.get_origin(tp) is None:
        return tp.__name__
    return repr(tp).replace("typing.", "")


def source_type_name(value: Any) -> str:
    if is_null(value):
        return "none"
    return type(value).__name__


def unwrap_optional(tp: Any) -> tuple[Any, bool]:
    """Strip ``None`` from ``X | None`` / ``Optional[X]``.

    Returns ``(inner, is_nullable)``. Unions of several non-None members keep
    their remaining members as a union.
    """
    if typing.get_origin(tp) not in _UNION_TYPES:
        return tp, False
    args = typing.get_args(tp)
    members = tuple(arg for arg in args if arg is not type(None))
    if len(members) == len(args):
        return tp, False
    if len(members) == 1:
        return members[0], True
    return Union[members], True  # noqa: UP007


def union_members(tp: Any) -> tuple[Any, ...] | None:
    if typing.get_origin(tp) in _UNION_TYPES:
        return typing.get_args(tp)
    return None


def origin_of(tp: Any) -> Any:
    """Runtime class behind a possibly parameterized type (``list[int]`` -> ``list``)."""
    return typing.get_origin(tp) or tp


def is_enum_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, Enum)


def enum_value_type(enum_cls: type[Enum]) -> type:
    """Type of the values behind an enum, ``int`` for empty or IntEnum-like enums."""
    for member in enum_cls:
        return type(member.value)
    return int


def is_collection_like(tp: Any) -> bool:
    """Iterable destination types other than ``str``."""
    origin = origin_of(tp)
    if not isinstance(origin, type) or issubclass(origin, str):
        return False
    return issubclass(origin, collections.abc.Iterable)


def is_scalar_target(tp: Any) -> bool:
    """Destinations served by the single-column scalar path."""
    if not isinstance(tp, type):
        return False
    if tp in SIZED_INTEGERS or tp in SIZED_FLOATS or tp in DATE_TYPES:
        return True
    if tp in (bool, int, float, str, Char):
        return True
    return issubclass(tp, Enum)
