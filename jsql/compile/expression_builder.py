"""Condition and predicate-group SQL compilers.

``ConditionBuilder`` renders the typed condition variants shared by WHERE,
HAVING and JOIN ON.  Nested statements are compiled through an injected
build function that writes into the same :class:`ParamBuffer`, so subquery
values land exactly where the subquery text is embedded.
"""
from __future__ import annotations

from collections.abc import Callable, Sequence

from jsql.compile.context import CompilationContext, ParamBuffer
from jsql.errors import CompilationError
from jsql.schema.expressions import MembershipOp
from jsql.schema.statement import (
    ColumnCondition,
    Condition,
    NotCondition,
    OperatorCondition,
    PredicateGroup,
    ScalarCondition,
    Statement,
    SubqueryCondition,
)


class ConditionBuilder:
    """Compiles typed conditions to SQL fragments.

    Args:
        ctx: Static compilation context.
        params: Shared parameter buffer for this run.
        build_subquery_fn: Compiles a nested statement into ``params``.
    """

    def __init__(
        self,
        ctx: CompilationContext,
        params: ParamBuffer,
        build_subquery_fn: Callable[[Statement], str],
    ) -> None:
        self._ctx = ctx
        self._params = params
        self._build_subquery_fn = build_subquery_fn

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, condition: Condition) -> str:
        """Compile one condition to a SQL fragment."""
        if isinstance(condition, ScalarCondition):
            return f"{condition.field} = {self._params.add(condition.value)}"
        if isinstance(condition, OperatorCondition):
            return self._build_operator(condition)
        if isinstance(condition, ColumnCondition):
            if condition.op == MembershipOp.IN.value:
                return f"{condition.field} IN ({condition.column})"
            return f"{condition.field} {condition.op} {condition.column}"
        if isinstance(condition, SubqueryCondition):
            sub_sql = self._build_subquery_fn(condition.query)
            return f"{condition.field} {condition.op} ({sub_sql})"
        if isinstance(condition, NotCondition):
            return f"NOT ({self.build(condition.inner)})"
        raise CompilationError(
            f"Unknown condition type: {type(condition).__name__}", clause="condition"
        )

    def build_all(self, conditions: Sequence[Condition], connective: str = "AND") -> str:
        """Compile conditions joined by ``connective`` (no outer parentheses)."""
        return f" {connective} ".join(self.build(c) for c in conditions)

    def build_groups(self, groups: Sequence[PredicateGroup]) -> str:
        """Compile predicate groups: each parenthesized, AND-joined together."""
        return " AND ".join(
            f"({self.build_all(g.conditions, g.connective.value)})" for g in groups
        )

    # ------------------------------------------------------------------
    # Operator sub-compilers
    # ------------------------------------------------------------------

    def _build_operator(self, condition: OperatorCondition) -> str:
        if condition.op == MembershipOp.IN.value:
            values = condition.value if isinstance(condition.value, tuple) else (condition.value,)
            placeholders = ", ".join(self._params.add(v) for v in values)
            return f"{condition.field} IN ({placeholders})"
        return f"{condition.field} {condition.op} {self._params.add(condition.value)}"
