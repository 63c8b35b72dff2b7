"""Command object handed between the engine and an adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Command:
    """SQL text plus the driver's parameter collection.

    ``parameters`` is ``None`` when the adapter could not provide a
    collection; the engine treats that as a setup fault.
    """

    sql: str
    parameters: dict[str, Any] | None = field(default_factory=dict)
