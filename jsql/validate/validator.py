"""Structural checks shared by the builder mutators and the compiler.

INSERT rows and UPDATE set-maps are checked when the mutator is called, so a
bad chain fails at the offending call.  ``StatementValidator`` repeats those
checks at compile time and adds the ones that depend on the whole chain
(missing table, missing operation).
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from jsql.errors import ValidationError
from jsql.schema.expressions import Operation
from jsql.schema.statement import Statement


def normalize_rows(rows: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Return INSERT rows as a list of dict copies.

    Raises:
        ValidationError: If there are no rows, a row is not a mapping, or
            the rows define no columns at all.
    """
    if isinstance(rows, Mapping):
        rows = [rows]
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise ValidationError(
            "INSERT expects a mapping or a sequence of mappings.",
            code="INVALID_ROW",
            details={"type": type(rows).__name__},
        )
    if not rows:
        raise ValidationError("INSERT requires at least one row.", code="EMPTY_INSERT")
    normalized: list[dict[str, Any]] = []
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise ValidationError(
                f"INSERT row {index} is not a mapping.",
                code="INVALID_ROW",
                details={"index": index, "type": type(row).__name__},
            )
        normalized.append(dict(row))
    if not any(normalized):
        raise ValidationError(
            "INSERT rows yield no columns.", code="EMPTY_INSERT_COLUMNS"
        )
    return normalized


def check_assignments(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Return an UPDATE set-map copy.

    Raises:
        ValidationError: If ``fields`` is empty or not a mapping.
    """
    if not isinstance(fields, Mapping):
        raise ValidationError(
            "UPDATE expects a mapping of field to value.",
            code="EMPTY_UPDATE",
            details={"type": type(fields).__name__},
        )
    if not fields:
        raise ValidationError(
            "UPDATE requires at least one field to set.", code="EMPTY_UPDATE"
        )
    return dict(fields)


class StatementValidator:
    """Validates a Statement immediately before compilation.

    Raises the first violation as a ``ValidationError``.
    """

    def validate(self, statement: Statement) -> None:
        """Validate ``statement`` and raise on the first violation found.

        Raises:
            ValidationError: On the first violation.
        """
        self._validate_table(statement)
        if statement.operation is Operation.INSERT:
            self._validate_insert(statement)
        elif statement.operation is Operation.UPDATE:
            check_assignments(statement.assignments)

    def _validate_table(self, statement: Statement) -> None:
        if statement.table:
            return
        if statement.ctes:
            names = [c.name for c in statement.ctes]
            raise ValidationError(
                "Table required: CTEs are declared but no main table was set.",
                code="MISSING_TABLE",
                details={"ctes": names},
            )
        if statement.operation is None:
            raise ValidationError(
                "No operation specified and no table set.",
                code="MISSING_OPERATION",
            )
        raise ValidationError(
            "Table required.",
            code="MISSING_TABLE",
            details={"operation": statement.operation.value},
        )

    def _validate_insert(self, statement: Statement) -> None:
        if not statement.rows:
            raise ValidationError("INSERT requires at least one row.", code="EMPTY_INSERT")
        if not statement.insert_columns():
            raise ValidationError(
                "INSERT rows yield no columns.", code="EMPTY_INSERT_COLUMNS"
            )
