"""jsql schema models: Statement, condition variants, operator DSL, table hints."""
from jsql.schema.expressions import Connective, Direction, JoinType, Operation
from jsql.schema.operators import ColumnRef, OperatorExpression, op
from jsql.schema.statement import (
    ColumnCondition,
    Condition,
    CTEClause,
    JoinClause,
    NotCondition,
    OperatorCondition,
    OrderByItem,
    PredicateGroup,
    ScalarCondition,
    Statement,
    SubqueryCondition,
)
from jsql.schema.table import TableSchema, define_table

__all__ = [
    "Connective",
    "Direction",
    "JoinType",
    "Operation",
    "ColumnRef",
    "OperatorExpression",
    "op",
    "ColumnCondition",
    "Condition",
    "CTEClause",
    "JoinClause",
    "NotCondition",
    "OperatorCondition",
    "OrderByItem",
    "PredicateGroup",
    "ScalarCondition",
    "Statement",
    "SubqueryCondition",
    "TableSchema",
    "define_table",
]
