"""Condition DSL: operator-tagged values for WHERE, HAVING and JOIN ON.

Each constructor returns an immutable :class:`OperatorExpression`.  The
expression carries no field name; the field comes from the mapping key it is
passed under::

    from jsql import db, op

    db("users").where({"age": op.gt(30), "status": op.in_(["a", "b"])})
    db("users").where({"id": op.not_(op.in_(banned_ids_query))})

``col`` is the one value that is never bound: it names another column and is
rendered verbatim, which is how column-to-column JOIN conditions are written.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import SimpleNamespace
from typing import Any

from pydantic import BaseModel, ConfigDict

from jsql.errors import ValidationError
from jsql.schema.expressions import ComparisonOp, LogicalOp, MembershipOp, PatternOp

_FROZEN = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)


class OperatorExpression(BaseModel):
    """An ``{op, val}`` pair consumed by every predicate-compiling path.

    Attributes:
        op: SQL operator symbol (``'='``, ``'>'``, ``'IN'``, ``'NOT'``, ...).
        val: The operand.  A scalar, a tuple (``IN`` lists), a nested query
            builder, a :class:`ColumnRef`, or, for ``NOT``, another
            expression.
    """

    model_config = _FROZEN

    op: str
    val: Any = None


class ColumnRef(BaseModel):
    """A column reference rendered verbatim instead of being bound."""

    model_config = _FROZEN

    name: str


def eq(val: Any) -> OperatorExpression:
    return OperatorExpression(op=ComparisonOp.EQ.value, val=val)


def ne(val: Any) -> OperatorExpression:
    return OperatorExpression(op=ComparisonOp.NE.value, val=val)


def gt(val: Any) -> OperatorExpression:
    return OperatorExpression(op=ComparisonOp.GT.value, val=val)


def gte(val: Any) -> OperatorExpression:
    return OperatorExpression(op=ComparisonOp.GTE.value, val=val)


def lt(val: Any) -> OperatorExpression:
    return OperatorExpression(op=ComparisonOp.LT.value, val=val)


def lte(val: Any) -> OperatorExpression:
    return OperatorExpression(op=ComparisonOp.LTE.value, val=val)


def like(pattern: Any) -> OperatorExpression:
    return OperatorExpression(op=PatternOp.LIKE.value, val=pattern)


def in_(values: Any) -> OperatorExpression:
    """Set membership against a list of values or a nested query.

    Lists, tuples, sets and other non-string iterables are frozen into a
    tuple and expand to one placeholder per element.

    Raises:
        ValidationError: If ``values`` is an empty iterable.
    """
    return OperatorExpression(op=MembershipOp.IN.value, val=membership_values(values))


def not_(condition: Any) -> OperatorExpression:
    """Negate another condition value; renders ``NOT (<inner>)``."""
    return OperatorExpression(op=LogicalOp.NOT.value, val=condition)


def col(name: str) -> ColumnRef:
    return ColumnRef(name=name)


def membership_values(values: Any) -> Any:
    """Freeze an ``IN`` operand; value lists become a non-empty tuple.

    Scalars, column references and nested queries pass through unchanged.

    Raises:
        ValidationError: If ``values`` is an empty iterable.
    """
    if not _is_value_list(values):
        return values
    frozen = tuple(values)
    if not frozen:
        raise ValidationError("IN requires at least one value.", code="EMPTY_IN_LIST")
    return frozen


def _is_value_list(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray, dict, BaseModel)):
        return False
    return isinstance(value, Iterable)


#: Namespace mirroring ``op.eq(...)`` call sites.
op = SimpleNamespace(
    eq=eq,
    ne=ne,
    gt=gt,
    gte=gte,
    lt=lt,
    lte=lte,
    like=like,
    in_=in_,
    not_=not_,
    col=col,
)
