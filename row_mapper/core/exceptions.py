"""RowMapper exception hierarchy.

All exceptions are RowMapper-specific. Raw driver and conversion exceptions
are never exposed to callers without one of these around them.
"""

from __future__ import annotations


class RowMapperError(Exception):
    """Base exception for all RowMapper errors."""


# --- Execution ---


class ExecutionError(RowMapperError):
    """Base for query execution errors."""


class ParameterSetupError(ExecutionError):
    """Raised when the adapter does not provide a parameter collection.

    Signals a misconfigured driver; never retried.
    """

    def __init__(self, adapter_name: str) -> None:
        self.adapter_name = adapter_name
        super().__init__(f"Adapter '{adapter_name}' did not provide a parameter collection")


class QueryExecutionError(ExecutionError):
    """Raised when the driver fails to execute a statement."""

    def __init__(self, label: str, detail: str) -> None:
        self.label = label
        super().__init__(f"Execution failed for '{label}': {detail}")


# --- Mapping ---


class MappingError(RowMapperError):
    """Base for mapping errors."""


class CoercionError(MappingError):
    """Raised when a column value cannot be converted for a destination field."""

    def __init__(
        self,
        source_type: str,
        target_type: str,
        owner: str,
        field_name: str,
        detail: str | None = None,
    ) -> None:
        self.source_type = source_type
        self.target_type = target_type
        self.owner = owner
        self.field_name = field_name
        message = f"Cannot coerce {source_type} to {target_type} for {owner}.{field_name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MissingConstructorError(CoercionError):
    """Raised when a collection field type cannot be built from a sequence."""


class EnumParseError(CoercionError):
    """Raised when a string matches no member name of the destination enum."""


class DuplicateColumnError(MappingError):
    """Raised when two columns of one row normalize to the same key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Duplicate column key '{key}' in result row")


class TargetTypeError(MappingError):
    """Raised when a destination type cannot be instantiated or populated."""

    def __init__(self, target_class: str, detail: str) -> None:
        self.target_class = target_class
        super().__init__(f"Cannot map rows to {target_class}: {detail}")


# --- Adapter ---


class AdapterError(RowMapperError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""


class PoolError(AdapterError):
    """Raised on connection pool failures."""
