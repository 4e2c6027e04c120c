"""Core Statement → SQL compilation logic.

``StatementCompiler`` is the top-level orchestrator.  It wires together the
clause-level and condition-level sub-builders, then linearizes a
:class:`~jsql.schema.statement.Statement` in fixed clause order.  Dialect
behaviour is delegated to the injected ``SQLCompiler``.

Sub-builder hierarchy
---------------------
StatementCompiler
  ├── ConditionBuilder     (expression_builder.py)
  ├── SelectClauseBuilder  (clause_builders.py)
  ├── JoinClauseBuilder    (clause_builders.py)
  ├── CteBuilder           (clause_builders.py)
  ├── InsertClauseBuilder  (clause_builders.py)
  └── SetClauseBuilder     (clause_builders.py)

Parameter ordering
------------------
A single :class:`~jsql.compile.context.ParamBuffer` is created per
``build()`` call and threaded through every sub-builder and every nested
statement (CTE bodies, subqueries).  Clauses are rendered strictly left to
right, so the buffer order is the placeholder order: CTE values, then JOIN ON,
WHERE, HAVING for SELECT; SET then WHERE for UPDATE.

Compilation reads the Statement and never writes to it, so calling
``build()`` twice yields identical output.
"""

from __future__ import annotations

import logging

from jsql.compile.base import CompiledSQL, SQLCompiler
from jsql.compile.clause_builders import (
    CteBuilder,
    InsertClauseBuilder,
    JoinClauseBuilder,
    SelectClauseBuilder,
    SetClauseBuilder,
)
from jsql.compile.context import CompilationContext, ParamBuffer
from jsql.compile.expression_builder import ConditionBuilder
from jsql.errors import CompilationError
from jsql.schema.expressions import Operation
from jsql.schema.statement import Statement
from jsql.validate.validator import StatementValidator

logger = logging.getLogger(__name__)


class StatementCompiler:
    """Compiles a Statement to ``?``-parameterized SQL.

    Args:
        compiler: Dialect-specific compiler instance.
        validator: Optional validator run on the statement and on every
            nested statement before rendering.  Defaults to
            :class:`~jsql.validate.validator.StatementValidator`.
    """

    def __init__(
        self,
        compiler: SQLCompiler,
        validator: StatementValidator | None = None,
    ) -> None:
        self._ctx = CompilationContext(compiler=compiler)
        self._validator = validator or StatementValidator()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, statement: Statement) -> CompiledSQL:
        """Compile ``statement`` to SQL text plus ordered parameters.

        Raises:
            ValidationError: If the statement (or a nested one) is invalid.
            CompilationError: If an unexpected statement shape is encountered.
        """
        params = ParamBuffer(placeholder=self._ctx.compiler.param_placeholder())
        sub_builders = self._make_sub_builders(params)
        sql = self._build_full(statement, sub_builders)
        logger.debug(
            "Compiled %s on %s for %s with %d params",
            (statement.operation or Operation.SELECT).value,
            statement.table,
            self._ctx.compiler.dialect_name,
            len(params.values),
        )
        return CompiledSQL(
            sql=sql,
            params=list(params.values),
            dialect=self._ctx.compiler.dialect_name,
        )

    # ------------------------------------------------------------------
    # Full statement assembly (CTE prologue + body + RETURNING)
    # ------------------------------------------------------------------

    def _build_full(self, statement: Statement, sub_builders: dict) -> str:
        self._validator.validate(statement)

        parts: list[str] = []
        if statement.ctes:
            parts.append(sub_builders["cte"].build(statement.ctes))

        operation = statement.operation or Operation.SELECT
        if operation is Operation.SELECT:
            parts.extend(self._build_select(statement, sub_builders))
        elif operation is Operation.INSERT:
            parts.append(sub_builders["insert"].build(statement))
        elif operation is Operation.UPDATE:
            parts.extend(self._build_update(statement, sub_builders))
        elif operation is Operation.DELETE:
            parts.extend(self._build_delete(statement, sub_builders))
        else:
            raise CompilationError(f"Unknown operation '{operation}'.")

        if statement.returning is not None:
            parts.append(f"RETURNING {', '.join(statement.returning)}")

        return " ".join(parts)

    # ------------------------------------------------------------------
    # Per-operation bodies
    # ------------------------------------------------------------------

    def _build_select(self, statement: Statement, sub_builders: dict) -> list[str]:
        parts = [sub_builders["select"].build(statement), f"FROM {statement.table}"]

        for join in statement.joins:
            parts.append(sub_builders["join"].build(join))

        if statement.where:
            parts.append(f"WHERE {sub_builders['cond'].build_groups(statement.where)}")

        if statement.group_by:
            parts.append(f"GROUP BY {', '.join(statement.group_by)}")

        if statement.having:
            parts.append(f"HAVING {sub_builders['cond'].build_groups(statement.having)}")

        if statement.order_by:
            order = statement.order_by
            parts.append(f"ORDER BY {order.field} {order.direction.value}")

        parts.extend(self._ctx.compiler.render_pagination(statement.limit, statement.offset))
        return parts

    def _build_update(self, statement: Statement, sub_builders: dict) -> list[str]:
        parts = [
            f"UPDATE {statement.table}",
            sub_builders["set"].build(statement.assignments),
        ]
        if statement.where:
            parts.append(f"WHERE {sub_builders['cond'].build_groups(statement.where)}")
        parts.extend(self._ctx.compiler.render_pagination(statement.limit, None))
        return parts

    def _build_delete(self, statement: Statement, sub_builders: dict) -> list[str]:
        parts = [f"DELETE FROM {statement.table}"]
        if statement.where:
            parts.append(f"WHERE {sub_builders['cond'].build_groups(statement.where)}")
        parts.extend(self._ctx.compiler.render_pagination(statement.limit, None))
        return parts

    # ------------------------------------------------------------------
    # Sub-builder wiring
    # ------------------------------------------------------------------

    def _make_sub_builders(self, params: ParamBuffer) -> dict:
        """Construct and wire the sub-builder graph for one compilation run.

        Nested statements (CTE bodies, subqueries) are compiled by
        ``build_fn`` into the same ``params`` buffer as the outer statement.
        """
        sub_builders: dict = {}

        def build_fn(statement: Statement) -> str:
            return self._build_full(statement, sub_builders)

        cond_builder = ConditionBuilder(self._ctx, params, build_fn)
        sub_builders.update(
            {
                "cond": cond_builder,
                "select": SelectClauseBuilder(),
                "join": JoinClauseBuilder(cond_builder),
                "cte": CteBuilder(build_fn),
                "insert": InsertClauseBuilder(params),
                "set": SetClauseBuilder(params),
            }
        )
        return sub_builders
