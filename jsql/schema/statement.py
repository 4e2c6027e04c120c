"""Pydantic models for the mutable Statement accumulated by a builder chain.

The :class:`Statement` is the intermediate representation shared by
:class:`~jsql.query.QueryBuilder` (which mutates it) and
:class:`~jsql.compile.builder.StatementCompiler` (which linearizes it).

Condition values are resolved into a closed set of variants when a mutator
is called, so the compiler dispatches on type instead of probing shapes:

``ScalarCondition``      ``field = ?``
``OperatorCondition``    ``field <op> ?`` (``IN`` lists expand)
``ColumnCondition``      ``field <op> other_column``
``SubqueryCondition``    ``field <op> (<nested sql>)``
``NotCondition``         ``NOT (<inner>)``
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from jsql.schema.expressions import DEFAULT_DIALECT, Connective, Direction, JoinType, Operation
from jsql.schema.table import TableSchema

_FROZEN = ConfigDict(extra="forbid", frozen=True)


# ---------------------------------------------------------------------------
# Condition variants
# ---------------------------------------------------------------------------


class ScalarCondition(BaseModel):
    """Implicit equality against a bound value."""

    model_config = _FROZEN

    kind: Literal["scalar"] = "scalar"
    field: str
    value: Any = None


class OperatorCondition(BaseModel):
    """Explicit operator against a bound value.

    For ``IN`` a tuple ``value`` expands to one placeholder per element.
    """

    model_config = _FROZEN

    kind: Literal["operator"] = "operator"
    field: str
    op: str
    value: Any = None


class ColumnCondition(BaseModel):
    """Comparison against another column; nothing is bound."""

    model_config = _FROZEN

    kind: Literal["column"] = "column"
    field: str
    op: str = "="
    column: str


class SubqueryCondition(BaseModel):
    """Comparison or membership against a nested statement."""

    model_config = _FROZEN

    kind: Literal["subquery"] = "subquery"
    field: str
    op: str = "="
    query: Statement


class NotCondition(BaseModel):
    """Negation of another condition."""

    model_config = _FROZEN

    kind: Literal["not"] = "not"
    inner: Condition


Condition = Annotated[
    Union[
        ScalarCondition,
        OperatorCondition,
        ColumnCondition,
        SubqueryCondition,
        NotCondition,
    ],
    Field(discriminator="kind"),
]


class PredicateGroup(BaseModel):
    """The conditions added by one ``where`` / ``or_where`` / ``having`` call.

    Attributes:
        connective: How the conditions of this group combine.
        conditions: Conditions in mapping order.
    """

    model_config = _FROZEN

    connective: Connective = Connective.AND
    conditions: tuple[Condition, ...]


# ---------------------------------------------------------------------------
# Clause descriptors
# ---------------------------------------------------------------------------


class JoinClause(BaseModel):
    """A single ``<KIND> JOIN <table> ON ...`` entry.

    Exactly one of ``on`` (a literal ON fragment) or ``conditions``
    (AND-combined) is populated.
    """

    model_config = _FROZEN

    type: JoinType = JoinType.INNER
    table: str
    on: str | None = None
    conditions: tuple[Condition, ...] = ()


class OrderByItem(BaseModel):
    model_config = _FROZEN

    field: str
    direction: Direction = Direction.ASC


class CTEClause(BaseModel):
    """A single ``name AS (...)`` entry of the WITH prologue."""

    model_config = _FROZEN

    name: str
    query: Statement


# ---------------------------------------------------------------------------
# Statement
# ---------------------------------------------------------------------------


class Statement(BaseModel):
    """Mutable description of one SQL command being built.

    Attributes:
        operation: The verb; ``None`` until a verb method is called.
        table: Target table.
        columns: Projection; empty means ``*``.
        rows: INSERT rows, each a field -> value mapping.
        assignments: UPDATE set-map.
        where: WHERE predicate groups, AND-combined.
        having: HAVING predicate groups, AND-combined.
        joins: Join descriptors in declaration order.
        group_by: GROUP BY columns.
        order_by: Single ORDER BY key.
        limit: LIMIT value.
        offset: OFFSET value.
        returning: RETURNING columns; ``None`` when not requested.
        ctes: CTE entries in declaration order.
        dialect: Registered dialect name used for compilation.
        table_schema: Optional column hints for the target table.
    """

    model_config = ConfigDict(extra="forbid")

    operation: Operation | None = None
    table: str | None = None
    columns: list[str] = Field(default_factory=list)
    rows: list[dict[str, Any]] = Field(default_factory=list)
    assignments: dict[str, Any] = Field(default_factory=dict)
    where: list[PredicateGroup] = Field(default_factory=list)
    having: list[PredicateGroup] = Field(default_factory=list)
    joins: list[JoinClause] = Field(default_factory=list)
    group_by: list[str] = Field(default_factory=list)
    order_by: OrderByItem | None = None
    limit: int | None = None
    offset: int | None = None
    returning: list[str] | None = None
    ctes: list[CTEClause] = Field(default_factory=list)
    dialect: str = DEFAULT_DIALECT
    table_schema: TableSchema | None = None

    def insert_columns(self) -> list[str]:
        """Union of row keys in first-seen order."""
        seen: dict[str, None] = {}
        for row in self.rows:
            for key in row:
                seen.setdefault(key, None)
        return list(seen)


# Resolve forward references created by the recursive Statement type.
SubqueryCondition.model_rebuild()
NotCondition.model_rebuild()
PredicateGroup.model_rebuild()
JoinClause.model_rebuild()
CTEClause.model_rebuild()
Statement.model_rebuild()
