"""Constants and enums shared by the statement model and the compiler.

Operator symbols are the literal SQL text emitted between a field and its
operand; they double as the ``op`` tag of an
:class:`~jsql.schema.operators.OperatorExpression`.
"""

from __future__ import annotations

from enum import Enum

# ---------------------------------------------------------------------------
# Statement kinds
# ---------------------------------------------------------------------------


class Operation(str, Enum):
    """The verb of a statement."""

    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class JoinType(str, Enum):
    """Supported join kinds."""

    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FULL = "FULL"


class Direction(str, Enum):
    """ORDER BY direction."""

    ASC = "ASC"
    DESC = "DESC"


class Connective(str, Enum):
    """Connective used between the fields of one predicate group."""

    AND = "AND"
    OR = "OR"


# ---------------------------------------------------------------------------
# Operator symbols
# ---------------------------------------------------------------------------


class ComparisonOp(str, Enum):
    """Binary comparison operators."""

    EQ = "="
    NE = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="


class PatternOp(str, Enum):
    """Pattern-match operators."""

    LIKE = "LIKE"


class MembershipOp(str, Enum):
    """Set-membership operators."""

    IN = "IN"


class LogicalOp(str, Enum):
    """Negation wrapper."""

    NOT = "NOT"


#: Binary comparison symbols.
COMPARISON_OPS: frozenset[str] = frozenset(op.value for op in ComparisonOp)

#: Pattern-match symbols.
PATTERN_OPS: frozenset[str] = frozenset(op.value for op in PatternOp)

#: Set-membership symbols: operand may be a sequence or a subquery.
MEMBERSHIP_OPS: frozenset[str] = frozenset(op.value for op in MembershipOp)

#: Every operator that renders as ``field <op> operand``.
BINARY_OPS: frozenset[str] = COMPARISON_OPS | PATTERN_OPS | MEMBERSHIP_OPS

#: Dialect used when a builder never calls ``dialect()``.
DEFAULT_DIALECT = "postgres"
