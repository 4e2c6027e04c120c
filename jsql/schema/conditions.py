"""Resolve caller-supplied condition mappings into typed condition variants.

``where``, ``or_where``, ``having`` and mapping-style JOIN ON specs all accept
a ``{field: value}`` mapping.  Each value is classified once, here, into one
of the variants defined in :mod:`jsql.schema.statement`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jsql.errors import ValidationError
from jsql.schema.expressions import BINARY_OPS, ComparisonOp, LogicalOp, MembershipOp
from jsql.schema.operators import ColumnRef, OperatorExpression, membership_values
from jsql.schema.statement import (
    ColumnCondition,
    Condition,
    NotCondition,
    OperatorCondition,
    ScalarCondition,
    Statement,
    SubqueryCondition,
)


def as_statement(value: Any) -> Statement | None:
    """Return the Statement behind a nested builder, or ``None``."""
    from jsql.query import QueryBuilder

    if isinstance(value, QueryBuilder):
        return value.statement
    if isinstance(value, Statement):
        return value
    return None


def to_condition(field: str, value: Any) -> Condition:
    """Classify one ``field: value`` pair.

    Args:
        field: Column or expression on the left-hand side, used verbatim.
        value: A scalar, an :class:`OperatorExpression`, a
            :class:`ColumnRef`, or a nested query builder.

    Returns:
        The typed condition.

    Raises:
        ValidationError: If an operator expression carries an unknown operator.
    """
    if isinstance(value, OperatorExpression):
        return _from_expression(field, value)
    if isinstance(value, ColumnRef):
        return ColumnCondition(field=field, column=value.name)
    nested = as_statement(value)
    if nested is not None:
        return SubqueryCondition(field=field, query=nested)
    return ScalarCondition(field=field, value=value)


def to_conditions(conditions: Mapping[str, Any]) -> tuple[Condition, ...]:
    """Classify every entry of a condition mapping, preserving order."""
    if not isinstance(conditions, Mapping):
        raise ValidationError(
            f"Conditions must be a mapping of field to value, got {type(conditions).__name__}.",
            code="INVALID_CONDITION",
        )
    return tuple(to_condition(field, value) for field, value in conditions.items())


def _from_expression(field: str, expr: OperatorExpression) -> Condition:
    if expr.op == LogicalOp.NOT.value:
        return NotCondition(inner=to_condition(field, expr.val))
    if expr.op not in BINARY_OPS:
        raise ValidationError(
            f"Unknown operator '{expr.op}' for field '{field}'.",
            code="INVALID_CONDITION",
            details={"field": field, "op": expr.op},
        )
    if isinstance(expr.val, ColumnRef):
        return ColumnCondition(field=field, op=expr.op, column=expr.val.name)
    nested = as_statement(expr.val)
    if nested is not None:
        return SubqueryCondition(field=field, op=expr.op, query=nested)
    if expr.op == ComparisonOp.EQ.value:
        return ScalarCondition(field=field, value=expr.val)
    if expr.op == MembershipOp.IN.value:
        return OperatorCondition(field=field, op=expr.op, value=membership_values(expr.val))
    return OperatorCondition(field=field, op=expr.op, value=expr.val)
