"""Fluent query builder.

``QueryBuilder`` owns one mutable :class:`~jsql.schema.statement.Statement`.
Every mutator updates it and returns the builder, and ``to_sql()`` compiles
it without modifying it::

    from jsql import db, op

    sql, params = (
        db("users")
        .select("id", "name")
        .where({"age": op.gt(30), "active": op.eq(True)})
        .order_by("name")
        .limit(50)
        .to_sql()
    )
    # SELECT id, name FROM users WHERE (age > ? AND active = ?) ORDER BY name ASC LIMIT 50
    # [30, True]

Semantics worth knowing:

* The last verb wins: ``select`` / ``insert`` / ``update`` / ``delete``
  overwrite the operation without error.
* ``select`` overwrites the projection; the aggregate and ranking helpers
  (``count``, ``sum``, ``row_number``, ...) append to it.
* Each ``where`` / ``or_where`` / ``having`` call adds one parenthesized
  group; groups are always joined with AND.  ``or_where`` only changes how
  the fields *within* its own mapping combine.
* Field and table names are interpolated verbatim; only values are bound.

A builder is meant for single-owner sequential use and is not thread-safe.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from jsql.compile.base import CompiledSQL
from jsql.compile.builder import StatementCompiler
from jsql.compile.registry import CompilerFactory
from jsql.errors import UnsupportedDialectError, ValidationError
from jsql.execution import runner
from jsql.schema.conditions import as_statement, to_conditions
from jsql.schema.expressions import Connective, Direction, JoinType, Operation
from jsql.schema.statement import (
    CTEClause,
    JoinClause,
    OrderByItem,
    PredicateGroup,
    Statement,
)
from jsql.schema.table import TableSchema
from jsql.validate.validator import check_assignments, normalize_rows


class QueryBuilder:
    """Chainable builder for a single SQL statement.

    Args:
        table: Optional target table.
        schema: Optional :class:`~jsql.schema.table.TableSchema`; seeds the
            table name when ``table`` is omitted and enables column checks.
    """

    def __init__(self, table: str | None = None, schema: TableSchema | None = None) -> None:
        self._statement = Statement(
            table=table or (schema.name if schema else None),
            table_schema=schema,
        )

    @property
    def statement(self) -> Statement:
        """The underlying statement model."""
        return self._statement

    def __repr__(self) -> str:
        stmt = self._statement
        operation = stmt.operation.value if stmt.operation else None
        return f"QueryBuilder(table={stmt.table!r}, operation={operation!r})"

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def select(self, *fields: str) -> QueryBuilder:
        """Set the projection; no fields means ``*``."""
        self._check_columns(fields)
        self._statement.operation = Operation.SELECT
        self._statement.columns = list(fields) if fields else ["*"]
        return self

    def insert(self, rows: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> QueryBuilder:
        """Insert one row or a sequence of rows.

        Rows may have different keys; the union of keys in first-seen order
        becomes the column list and missing keys bind ``None``.

        Raises:
            ValidationError: If there are no rows or no columns.
        """
        normalized = normalize_rows(rows)
        for row in normalized:
            self._check_columns(row)
        self._statement.operation = Operation.INSERT
        self._statement.rows = normalized
        return self

    def update(self, fields: Mapping[str, Any]) -> QueryBuilder:
        """Set the UPDATE set-map.

        Raises:
            ValidationError: If ``fields`` is empty.
        """
        assignments = check_assignments(fields)
        self._check_columns(assignments)
        self._statement.operation = Operation.UPDATE
        self._statement.assignments = assignments
        return self

    def delete(self) -> QueryBuilder:
        self._statement.operation = Operation.DELETE
        return self

    # ------------------------------------------------------------------
    # Target
    # ------------------------------------------------------------------

    def table(self, name: str) -> QueryBuilder:
        self._statement.table = name
        return self

    def from_(self, name: str) -> QueryBuilder:
        """Alias of :meth:`table`."""
        return self.table(name)

    # ------------------------------------------------------------------
    # Aggregate and ranking helpers (append to the projection)
    # ------------------------------------------------------------------

    def count(self, field: str = "*", alias: str | None = None) -> QueryBuilder:
        return self._append_function("COUNT", field, alias)

    def sum(self, field: str, alias: str | None = None) -> QueryBuilder:
        return self._append_function("SUM", field, alias)

    def avg(self, field: str, alias: str | None = None) -> QueryBuilder:
        return self._append_function("AVG", field, alias)

    def min(self, field: str, alias: str | None = None) -> QueryBuilder:
        return self._append_function("MIN", field, alias)

    def max(self, field: str, alias: str | None = None) -> QueryBuilder:
        return self._append_function("MAX", field, alias)

    def row_number(
        self,
        order_by: str,
        direction: str | Direction = "ASC",
        partition_by: str | None = None,
        alias: str | None = None,
    ) -> QueryBuilder:
        return self._append_ranking("ROW_NUMBER", order_by, direction, partition_by, alias)

    def rank(
        self,
        order_by: str,
        direction: str | Direction = "ASC",
        partition_by: str | None = None,
        alias: str | None = None,
    ) -> QueryBuilder:
        return self._append_ranking("RANK", order_by, direction, partition_by, alias)

    def dense_rank(
        self,
        order_by: str,
        direction: str | Direction = "ASC",
        partition_by: str | None = None,
        alias: str | None = None,
    ) -> QueryBuilder:
        return self._append_ranking("DENSE_RANK", order_by, direction, partition_by, alias)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def where(self, conditions: Mapping[str, Any]) -> QueryBuilder:
        """Add one WHERE group whose fields combine with AND."""
        self._add_group(self._statement.where, Connective.AND, conditions)
        return self

    def or_where(self, conditions: Mapping[str, Any]) -> QueryBuilder:
        """Add one WHERE group whose fields combine with OR.

        The new group is still AND-joined to the groups before it.
        """
        self._add_group(self._statement.where, Connective.OR, conditions)
        return self

    def having(self, conditions: Mapping[str, Any]) -> QueryBuilder:
        """Add one HAVING group whose fields combine with AND."""
        self._add_group(self._statement.having, Connective.AND, conditions)
        return self

    def group_by(self, *fields: str) -> QueryBuilder:
        self._check_columns(fields)
        self._statement.group_by = list(fields)
        return self

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def inner_join(self, table: str, on: str | Mapping[str, Any], right: str | None = None) -> QueryBuilder:
        return self._join(JoinType.INNER, table, on, right)

    def left_join(self, table: str, on: str | Mapping[str, Any], right: str | None = None) -> QueryBuilder:
        return self._join(JoinType.LEFT, table, on, right)

    def right_join(self, table: str, on: str | Mapping[str, Any], right: str | None = None) -> QueryBuilder:
        return self._join(JoinType.RIGHT, table, on, right)

    def full_join(self, table: str, on: str | Mapping[str, Any], right: str | None = None) -> QueryBuilder:
        return self._join(JoinType.FULL, table, on, right)

    # ------------------------------------------------------------------
    # CTEs, RETURNING, ordering, pagination, dialect
    # ------------------------------------------------------------------

    def with_(self, name: str, query: QueryBuilder | Statement) -> QueryBuilder:
        """Declare a CTE ``name AS (<query>)`` ahead of the main statement."""
        nested = as_statement(query)
        if nested is None:
            raise ValidationError(
                f"CTE '{name}' must be a query builder.",
                code="INVALID_CTE",
                details={"name": name, "type": type(query).__name__},
            )
        self._statement.ctes.append(CTEClause(name=name, query=nested))
        return self

    def returning(self, *fields: str) -> QueryBuilder:
        self._statement.returning = list(fields) if fields else ["*"]
        return self

    def order_by(self, field: str, direction: str | Direction = "ASC") -> QueryBuilder:
        """Order by a single key; a later call replaces an earlier one."""
        self._statement.order_by = OrderByItem(field=field, direction=_direction(direction))
        return self

    def limit(self, count: int) -> QueryBuilder:
        self._statement.limit = _non_negative("limit", count)
        return self

    def offset(self, count: int) -> QueryBuilder:
        self._statement.offset = _non_negative("offset", count)
        return self

    def dialect(self, name: str) -> QueryBuilder:
        """Compile for the dialect registered under ``name``.

        Raises:
            UnsupportedDialectError: If no compiler is registered for ``name``.
        """
        if not CompilerFactory.is_registered(name):
            raise UnsupportedDialectError(name, CompilerFactory.registered_targets())
        self._statement.dialect = name
        return self

    # ------------------------------------------------------------------
    # Compilation and execution
    # ------------------------------------------------------------------

    def to_sql(self) -> CompiledSQL:
        """Compile the statement; safe to call repeatedly.

        Raises:
            ValidationError: If the statement is incomplete or invalid.
        """
        compiler = CompilerFactory.create(self._statement.dialect)
        return StatementCompiler(compiler).build(self._statement)

    def execute(self, client: Any) -> list[Any]:
        """Compile and run on ``client``; see :func:`jsql.execution.runner.execute`."""
        return runner.execute(self, client)

    async def execute_async(self, client: Any) -> list[Any]:
        """Async form of :meth:`execute`."""
        return await runner.execute_async(self, client)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _add_group(
        self,
        groups: list[PredicateGroup],
        connective: Connective,
        conditions: Mapping[str, Any],
    ) -> None:
        parsed = to_conditions(conditions)
        if parsed:
            groups.append(PredicateGroup(connective=connective, conditions=parsed))

    def _join(
        self,
        join_type: JoinType,
        table: str,
        on: str | Mapping[str, Any],
        right: str | None,
    ) -> QueryBuilder:
        if right is not None:
            join = JoinClause(type=join_type, table=table, on=f"{on} = {right}")
        elif isinstance(on, str):
            join = JoinClause(type=join_type, table=table, on=on)
        else:
            parsed = to_conditions(on)
            if not parsed:
                raise ValidationError(
                    f"JOIN on '{table}' needs at least one ON condition.",
                    code="INVALID_CONDITION",
                    details={"table": table},
                )
            join = JoinClause(type=join_type, table=table, conditions=parsed)
        self._statement.joins.append(join)
        return self

    def _append_function(self, func: str, field: str, alias: str | None) -> QueryBuilder:
        expr = f"{func}({field})"
        return self._append_column(f"{expr} AS {alias}" if alias else expr)

    def _append_ranking(
        self,
        func: str,
        order_by: str,
        direction: str | Direction,
        partition_by: str | None,
        alias: str | None,
    ) -> QueryBuilder:
        window = f"ORDER BY {order_by} {_direction(direction).value}"
        if partition_by:
            window = f"PARTITION BY {partition_by} {window}"
        expr = f"{func}() OVER ({window})"
        return self._append_column(f"{expr} AS {alias}" if alias else expr)

    def _append_column(self, expr: str) -> QueryBuilder:
        self._statement.operation = Operation.SELECT
        self._statement.columns.append(expr)
        return self

    def _check_columns(self, fields: Any) -> None:
        if self._statement.table_schema is not None:
            self._statement.table_schema.check_columns(fields)


def db(table: str | TableSchema | None = None, schema: TableSchema | None = None) -> QueryBuilder:
    """Create a builder, optionally seeded with a table name or schema.

    Args:
        table: Table name, or a :class:`TableSchema` (shorthand for
            ``schema=...``).
        schema: Optional column hints for the target table.
    """
    if isinstance(table, TableSchema):
        return QueryBuilder(schema=table)
    return QueryBuilder(table, schema)


def _direction(direction: str | Direction) -> Direction:
    if isinstance(direction, Direction):
        return direction
    if isinstance(direction, str) and direction.upper() in Direction.__members__:
        return Direction[direction.upper()]
    raise ValidationError(
        f"Invalid sort direction {direction!r}; expected ASC or DESC.",
        code="INVALID_DIRECTION",
        details={"direction": direction},
    )


def _non_negative(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(
            f"{name.upper()} must be a non-negative integer, got {value!r}.",
            code="INVALID_PAGINATION",
            details={name: value},
        )
    return value
