"""Per-type coercion overrides.

A TypeMappings instance holds, for concrete application types, an inbound
function (database value -> application value) and an outbound function
(application value -> database value). Both the parameter normalizer and the
structured field coercer consult it before their built-in rules.

Usage:
    mappings = TypeMappings()
    mappings.set(Money, inbound=Money.from_cents, outbound=lambda m: m.cents)
    engine = Engine(manager, type_mappings=mappings)

The object is plain mutable state without locking; register everything
before queries run, or serialize registration yourself.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

Coercion = Callable[[Any], Any]


class TypeMappings:
    """Inbound and outbound coercion overrides keyed by exact type."""

    def __init__(self) -> None:
        self._inbound: dict[type, Coercion] = {}
        self._outbound: dict[type, Coercion] = {}

    def set(
        self,
        python_type: type,
        inbound: Coercion | None = None,
        outbound: Coercion | None = None,
    ) -> None:
        """Install both directions for *python_type*.

        A ``None`` direction removes any existing override for that direction.
        """
        _assign(self._inbound, python_type, inbound)
        _assign(self._outbound, python_type, outbound)

    def remove(self, python_type: type) -> None:
        """Drop both directions for *python_type*."""
        self._inbound.pop(python_type, None)
        self._outbound.pop(python_type, None)

    def inbound_for(self, python_type: Any) -> Coercion | None:
        """Database -> application override for a destination type."""
        return self._inbound.get(python_type)

    def outbound_for(self, python_type: Any) -> Coercion | None:
        """Application -> database override for a parameter value's type."""
        return self._outbound.get(python_type)

    def __contains__(self, python_type: object) -> bool:
        return python_type in self._inbound or python_type in self._outbound

    def __len__(self) -> int:
        """Number of types with at least one override."""
        return len(self._inbound.keys() | self._outbound.keys())


def _assign(table: dict[type, Coercion], python_type: type, fn: Coercion | None) -> None:
    if fn is None:
        table.pop(python_type, None)
    else:
        table[python_type] = fn
