"""jsql: fluent, parameterized SQL query building.

Chain calls, compile once, bind every value.

Public API
----------
``db``
    Create a :class:`QueryBuilder`, optionally seeded with a table name or a
    :class:`TableSchema`.

``op``
    Condition DSL namespace (``op.eq``, ``op.gt``, ``op.in_``, ``op.not_``,
    ``op.col``, ...).  The same constructors are re-exported individually.

``execute`` / ``execute_async`` / ``transaction`` / ``transaction_async``
    Hand compiled statements to a caller-supplied database client.

Example::

    from jsql import db, op

    sub = db("orders").select("user_id").where({"total": op.gt(100)})
    sql, params = db("users").where({"id": op.in_(sub)}).to_sql()
    # SELECT * FROM users WHERE (id IN (SELECT user_id FROM orders WHERE (total > ?)))
    # [100]

Extensibility
-------------
New dialect compilers can be registered via::

    from jsql.compile.registry import CompilerFactory

    @CompilerFactory.register("mssql")
    class MSSQLCompiler(SQLCompiler):
        ...

After registration, ``db(...).dialect("mssql")`` picks it up.
"""

from __future__ import annotations

from jsql.compile.base import CompiledSQL, SQLCompiler
from jsql.compile.builder import StatementCompiler
from jsql.compile.mysql import MySQLCompiler
from jsql.compile.postgres import PostgresCompiler
from jsql.compile.registry import CompilerFactory
from jsql.compile.sqlite import SQLiteCompiler
from jsql.errors import (
    CompilationError,
    JSQLError,
    UnknownColumnError,
    UnsupportedClientError,
    UnsupportedDialectError,
    ValidationError,
)
from jsql.execution.runner import execute, execute_async, transaction, transaction_async
from jsql.query import QueryBuilder, db
from jsql.schema.expressions import DEFAULT_DIALECT
from jsql.schema.operators import (
    ColumnRef,
    OperatorExpression,
    col,
    eq,
    gt,
    gte,
    in_,
    like,
    lt,
    lte,
    ne,
    not_,
    op,
)
from jsql.schema.statement import Statement
from jsql.schema.table import TableSchema, define_table

# ---------------------------------------------------------------------------
# Register built-in compilers with CompilerFactory
# ---------------------------------------------------------------------------

CompilerFactory.register_class("postgres", PostgresCompiler)
CompilerFactory.register_class("sqlite", SQLiteCompiler)
CompilerFactory.register_class("mysql", MySQLCompiler)

__all__ = [
    # Entry points
    "db",
    "QueryBuilder",
    "Statement",
    # Condition DSL
    "op",
    "OperatorExpression",
    "ColumnRef",
    "eq",
    "ne",
    "gt",
    "gte",
    "lt",
    "lte",
    "like",
    "in_",
    "not_",
    "col",
    # Schema hints
    "TableSchema",
    "define_table",
    # Compilation
    "CompiledSQL",
    "CompilerFactory",
    "DEFAULT_DIALECT",
    "SQLCompiler",
    "StatementCompiler",
    "MySQLCompiler",
    "PostgresCompiler",
    "SQLiteCompiler",
    # Execution
    "execute",
    "execute_async",
    "transaction",
    "transaction_async",
    # Errors
    "JSQLError",
    "ValidationError",
    "UnsupportedDialectError",
    "UnknownColumnError",
    "CompilationError",
    "UnsupportedClientError",
]
