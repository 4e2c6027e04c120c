"""Custom exception hierarchy for jsql.

All public errors inherit from JSQLError so callers can catch the base
class for any jsql-specific failure.  Database errors raised by an execution
client are never wrapped.
"""
from __future__ import annotations

from typing import Any


class JSQLError(Exception):
    """Base exception for all jsql errors."""


class ValidationError(JSQLError):
    """Raised when a statement is structurally invalid.

    Raised synchronously, either by a mutator (empty INSERT rows, empty
    UPDATE set-map, bad ORDER BY direction, ...) or by ``to_sql()`` (missing
    table, missing operation).

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. MISSING_TABLE).
        details: Extra context about the offending input.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class UnsupportedDialectError(ValidationError):
    """Raised when a dialect name has no registered compiler."""

    def __init__(self, dialect: str, registered: list[str]) -> None:
        super().__init__(
            f"Unsupported dialect: '{dialect}'. Registered dialects: {registered}.",
            code="UNSUPPORTED_DIALECT",
            details={"dialect": dialect, "registered": registered},
        )


class UnknownColumnError(ValidationError):
    """Raised when a column is not part of the attached table schema."""

    def __init__(self, table: str, column: str, allowed_columns: list[str]) -> None:
        super().__init__(
            f"Column '{column}' is not defined on table '{table}'.",
            code="UNKNOWN_COLUMN",
            details={
                "table": table,
                "column": column,
                "allowed_columns": allowed_columns,
            },
        )


class CompilationError(JSQLError):
    """Raised when SQL compilation fails for an unexpected reason.

    Args:
        message: Human-readable description.
        clause: The clause being compiled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class UnsupportedClientError(JSQLError):
    """Raised when an execution client exposes neither ``query`` nor ``execute``.

    Args:
        client: The rejected client object.
    """

    def __init__(self, client: Any) -> None:
        super().__init__(
            f"Unsupported client {type(client).__name__!r}: expected a "
            "'query(sql, params)' or 'execute(sql, params)' method."
        )
        self.client = client
