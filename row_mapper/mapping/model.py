"""Row-to-object mapper.

Supports dataclasses, Pydantic models, and plain classes with settable
attributes. Columns are matched to fields by normalized name, so the column
``device_id`` fills the field ``DeviceId``. Columns without a matching field
are ignored; fields without a matching column keep their default.

Dataclasses and Pydantic models are built from keyword arguments, so fields
without a default need a matching column. Plain classes are built without
arguments and filled attribute by attribute.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Generic, TypeVar

from row_mapper.core.exceptions import TargetTypeError
from row_mapper.mapping.coerce import coerce_field
from row_mapper.mapping.fields import FieldSetter, build_setter_map, is_pydantic_model
from row_mapper.mapping.names import normalize_name
from row_mapper.mapping.protocol import RawRow
from row_mapper.mapping.registry import TypeMappings

T = TypeVar("T")


class ModelMapper(Generic[T]):
    """Field-by-field row-to-model mapper.

    The setter map is built lazily from the first row and kept for the
    lifetime of the mapper; the Engine creates one mapper per query.

    Args:
        target_class: The class to construct for each row.
        type_mappings: Inbound coercion overrides.
        aliases: Optional column-name to field-name mapping.
    """

    def __init__(
        self,
        target_class: type[T],
        type_mappings: TypeMappings | None = None,
        aliases: dict[str, str] | None = None,
    ) -> None:
        self._target_class = target_class
        self._type_mappings = type_mappings if type_mappings is not None else TypeMappings()
        self._aliases = aliases
        self._is_pydantic = is_pydantic_model(target_class)
        self._init_fields: frozenset[str] | None = None
        if dataclasses.is_dataclass(target_class):
            self._init_fields = frozenset(f.name for f in dataclasses.fields(target_class) if f.init)
        self._setters: dict[str, FieldSetter] | None = None

    def _setter_for(self, column: str) -> FieldSetter | None:
        if self._setters is None:
            self._setters = build_setter_map(self._target_class)
        if self._aliases:
            column = self._aliases.get(column, column)
        return self._setters.get(normalize_name(column))

    def _build(self, values: dict[str, Any]) -> T:
        cls: Any = self._target_class
        if self._is_pydantic:
            missing = [
                name
                for name, info in cls.model_fields.items()
                if info.is_required() and name not in values
            ]
            if missing:
                raise TargetTypeError(cls.__name__, f"no column for required field(s) {', '.join(missing)}")
            return cls.model_construct(**values)  # type: ignore[no-any-return]

        if self._init_fields is not None:
            kwargs = {k: v for k, v in values.items() if k in self._init_fields}
            rest = {k: v for k, v in values.items() if k not in self._init_fields}
        else:
            kwargs, rest = {}, values
        try:
            instance = cls(**kwargs)
        except TypeError as e:
            raise TargetTypeError(cls.__name__, f"cannot be constructed from the row ({e})") from e
        for name, value in rest.items():
            setattr(instance, name, value)
        return instance  # type: ignore[no-any-return]

    def map_one(self, row: RawRow) -> T:
        """Map a single row to a new target_class instance."""
        owner = self._target_class.__name__
        values: dict[str, Any] = {}
        for column, value in row.items():
            setter = self._setter_for(column)
            if setter is None:
                continue
            values[setter.name] = coerce_field(value, setter, self._type_mappings, owner)
        return self._build(values)

    def map_many(self, rows: list[RawRow]) -> list[T]:
        """Map all rows via map_one."""
        return [self.map_one(row) for row in rows]
