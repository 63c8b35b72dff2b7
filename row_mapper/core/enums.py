"""Database backend and parameter type enumerations."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


class DbType(Enum):
    """Type classification carried by a parameter binding.

    Bindings never carry a narrow database type: OBJECT leaves the decision
    to the driver, NULL marks an explicit database null.
    """

    OBJECT = "object"
    NULL = "null"
