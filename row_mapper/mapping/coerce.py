"""Column value -> destination field coercion.

Order of rules for one value and one FieldSetter:

1. ``None`` / ``DB_NULL`` -> ``None`` (nullability is not checked)
2. nullable wrappers are already unwrapped in ``FieldSetter.target_type``
3. inbound TypeMappings override for the target type
4. value already an instance of the target -> as-is
5. enum target: parse member name from ``str``, otherwise reinterpret the
   value through the enum's underlying type
6. ndarray target: bytes-like sources become uint8 arrays; other
   collection targets are constructed from the raw sequence
7. ``str`` target: ``str(value)``
8. anything else: ``target(value)``

Failures in 4-8 surface as CoercionError carrying source type, target type
and the owning class/field.
"""

from __future__ import annotations

import inspect
from typing import Any

import numpy as np

from row_mapper.core.exceptions import (
    CoercionError,
    EnumParseError,
    MissingConstructorError,
)
from row_mapper.mapping.fields import FieldSetter
from row_mapper.mapping.registry import TypeMappings
from row_mapper.mapping.types import (
    enum_value_type,
    is_enum_type,
    is_null,
    origin_of,
    source_type_name,
    type_name,
    union_members,
)


def coerce_field(
    value: Any,
    setter: FieldSetter,
    type_mappings: TypeMappings,
    owner: str,
) -> Any:
    """Convert a raw column value for assignment to *setter*'s field."""
    if is_null(value):
        return None

    target = setter.target_type
    inbound = type_mappings.inbound_for(target)
    if inbound is not None:
        value = inbound(value)
        if is_null(value):
            return None

    try:
        return _convert(value, setter, owner)
    except CoercionError:
        raise
    except Exception as e:
        raise CoercionError(
            source_type_name(value),
            type_name(setter.declared_type),
            owner,
            setter.name,
            str(e),
        ) from e


def _convert(value: Any, setter: FieldSetter, owner: str) -> Any:
    target = setter.target_type
    if target is Any:
        return value

    members = union_members(target)
    if members is not None:
        if isinstance(value, tuple(origin_of(m) for m in members)):
            return value
        raise TypeError(f"value matches no member of {type_name(target)}")

    origin = origin_of(target)
    if isinstance(value, origin):
        return value

    if is_enum_type(origin):
        return _to_enum(value, setter, owner)

    if origin is np.ndarray:
        return _to_array(value)

    if setter.is_collection_like:
        _check_sequence_constructor(origin, value, setter, owner)
        return origin(value)

    if origin is str:
        return str(value)

    return origin(value)


def _to_enum(value: Any, setter: FieldSetter, owner: str) -> Any:
    enum_cls = origin_of(setter.target_type)
    if isinstance(value, str):
        try:
            return enum_cls[value]
        except KeyError:
            raise EnumParseError(
                source_type_name(value),
                type_name(setter.declared_type),
                owner,
                setter.name,
                f"'{value}' is not a member name",
            ) from None
    return enum_cls(enum_value_type(enum_cls)(value))


def _to_array(value: Any) -> np.ndarray:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return np.frombuffer(value, dtype=np.uint8).copy()
    return np.asarray(value)


def _check_sequence_constructor(origin: type, value: Any, setter: FieldSetter, owner: str) -> None:
    """Require *origin* to be instantiable with a single sequence argument."""
    detail: str | None = None
    if inspect.isabstract(origin) or origin.__module__ in ("collections.abc", "typing"):
        detail = f"{origin.__name__} is abstract"
    else:
        try:
            signature = inspect.signature(origin)
        except (TypeError, ValueError):
            # builtins without introspectable signatures accept an iterable
            signature = None
        if signature is not None:
            try:
                signature.bind(value)
            except TypeError:
                detail = f"{origin.__name__} has no single-argument sequence constructor"
    if detail is not None:
        raise MissingConstructorError(
            source_type_name(value),
            type_name(setter.declared_type),
            owner,
            setter.name,
            detail,
        )
