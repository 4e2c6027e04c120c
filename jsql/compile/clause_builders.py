"""Clause-level SQL builders.

Each class handles exactly one SQL clause.  ``CteBuilder`` receives a
*shared build function* (``Callable[[Statement], str]``) so CTE bodies are
compiled into the same :class:`~jsql.compile.context.ParamBuffer` as the
outer statement, ahead of every outer value.

Classes
-------
SelectClauseBuilder    ``SELECT <columns>``
JoinClauseBuilder      ``<KIND> JOIN <table> ON …``
CteBuilder             ``WITH <name> AS (…), …``
InsertClauseBuilder    ``INSERT INTO <table> (…) VALUES (…), …``
SetClauseBuilder       ``SET <field> = ?, …``
"""
from __future__ import annotations

from typing import Callable

from jsql.compile.context import ParamBuffer
from jsql.compile.expression_builder import ConditionBuilder
from jsql.errors import CompilationError
from jsql.schema.statement import CTEClause, JoinClause, Statement


class SelectClauseBuilder:
    """Builds the ``SELECT …`` clause."""

    def build(self, statement: Statement) -> str:
        if not statement.columns:
            return "SELECT *"
        return f"SELECT {', '.join(statement.columns)}"


class JoinClauseBuilder:
    """Builds a single ``<KIND> JOIN … ON …`` fragment."""

    def __init__(self, condition_builder: ConditionBuilder) -> None:
        self._cond = condition_builder

    def build(self, join: JoinClause) -> str:
        if join.on is not None:
            on_sql = join.on
        elif join.conditions:
            on_sql = self._cond.build_all(join.conditions)
        else:
            raise CompilationError(
                f"JOIN on '{join.table}' has no ON condition.", clause="JOIN"
            )
        return f"{join.type.value} JOIN {join.table} ON {on_sql}"


class CteBuilder:
    """Builds the ``WITH <name> AS (…)`` prologue.

    CTE bodies are compiled using ``build_fn`` so they share the outer
    ``ParamBuffer``; CTE values precede the main statement's values.
    """

    def __init__(self, build_fn: Callable[[Statement], str]) -> None:
        self._build_fn = build_fn

    def build(self, ctes: list[CTEClause]) -> str:
        cte_parts = [f"{cte.name} AS ({self._build_fn(cte.query)})" for cte in ctes]
        return f"WITH {', '.join(cte_parts)}"


class InsertClauseBuilder:
    """Builds ``INSERT INTO … VALUES …`` with one placeholder group per row.

    Every row contributes one value per column; a key missing from a row
    binds ``None`` so row arity always matches the column list.
    """

    def __init__(self, params: ParamBuffer) -> None:
        self._params = params

    def build(self, statement: Statement) -> str:
        columns = statement.insert_columns()
        groups = []
        for row in statement.rows:
            placeholders = ", ".join(self._params.add(row.get(c)) for c in columns)
            groups.append(f"({placeholders})")
        return (
            f"INSERT INTO {statement.table} ({', '.join(columns)}) "
            f"VALUES {', '.join(groups)}"
        )


class SetClauseBuilder:
    """Builds the ``SET …`` clause of an UPDATE."""

    def __init__(self, params: ParamBuffer) -> None:
        self._params = params

    def build(self, assignments: dict) -> str:
        set_parts = [f"{k} = {self._params.add(v)}" for k, v in assignments.items()]
        return f"SET {', '.join(set_parts)}"
