"""Destination field descriptors.

describe_fields() turns a destination class into a table of FieldSetter
descriptors once; build_setter_map() keys that table by normalized name.

Supported destinations (same detection as the rest of the mapping layer):
1. Pydantic BaseModel -> model_fields
2. dataclass -> dataclasses.fields (must not be frozen)
3. Plain class -> annotated attributes, then properties with a setter
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from row_mapper.core.exceptions import TargetTypeError
from row_mapper.mapping.names import normalize_name
from row_mapper.mapping.types import is_collection_like, unwrap_optional

logger = logging.getLogger(__name__)


def is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return isinstance(cls, type) and issubclass(cls, BaseModel)


@dataclass(frozen=True)
class FieldSetter:
    """How to assign one destination field."""

    name: str
    declared_type: Any
    target_type: Any
    is_nullable: bool
    is_collection_like: bool

    @classmethod
    def for_field(cls, name: str, declared_type: Any) -> FieldSetter:
        target_type, is_nullable = unwrap_optional(declared_type)
        return cls(
            name=name,
            declared_type=declared_type,
            target_type=target_type,
            is_nullable=is_nullable,
            is_collection_like=is_collection_like(target_type),
        )


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # unresolvable forward references: fall back to raw annotations
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(getattr(klass, "__annotations__", {}))
        return hints


def _is_class_var(tp: Any) -> bool:
    return tp is typing.ClassVar or typing.get_origin(tp) is typing.ClassVar


def _plain_fields(cls: type) -> list[FieldSetter]:
    setters: list[FieldSetter] = []
    seen: set[str] = set()
    for name, tp in _type_hints(cls).items():
        if name.startswith("_") or _is_class_var(tp):
            continue
        attr = getattr(cls, name, None)
        if isinstance(attr, property) and attr.fset is None:
            continue
        setters.append(FieldSetter.for_field(name, tp))
        seen.add(name)

    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if name in seen or name.startswith("_"):
                continue
            if isinstance(attr, property) and attr.fset is not None:
                setters.append(FieldSetter.for_field(name, _property_type(attr)))
                seen.add(name)
    return setters


def _property_type(prop: property) -> Any:
    if prop.fget is None:
        return Any
    try:
        return typing.get_type_hints(prop.fget).get("return", Any)
    except (NameError, TypeError):
        return Any


def describe_fields(cls: type) -> list[FieldSetter]:
    """Return the settable fields of *cls* in declaration order."""
    if is_pydantic_model(cls):
        if cls.model_config.get("frozen"):
            raise TargetTypeError(cls.__name__, "frozen models cannot be populated")
        return [
            FieldSetter.for_field(name, info.annotation)
            for name, info in cls.model_fields.items()
        ]

    if dataclasses.is_dataclass(cls):
        if cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
            raise TargetTypeError(cls.__name__, "frozen dataclasses cannot be populated")
        hints = _type_hints(cls)
        return [
            FieldSetter.for_field(f.name, hints.get(f.name, Any))
            for f in dataclasses.fields(cls)
        ]

    return _plain_fields(cls)


def build_setter_map(cls: type) -> dict[str, FieldSetter]:
    """Key the field descriptors of *cls* by normalized name.

    On a collision the first-declared field wins.
    """
    setters: dict[str, FieldSetter] = {}
    for setter in describe_fields(cls):
        key = normalize_name(setter.name)
        if key in setters:
            logger.debug(
                "%s.%s normalizes to '%s', already taken by %s; ignored",
                cls.__name__,
                setter.name,
                key,
                setters[key].name,
            )
            continue
        setters[key] = setter
    logger.debug("Built setter map for %s with %d fields", cls.__name__, len(setters))
    return setters
