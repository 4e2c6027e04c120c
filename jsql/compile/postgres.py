"""PostgreSQL dialect compiler."""

from __future__ import annotations

from jsql.compile.base import SQLCompiler


class PostgresCompiler(SQLCompiler):
    """Compiles statements for PostgreSQL.

    Placeholders stay ``?``; drivers that expect ``$1`` or ``%s`` translate
    them on their side.
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"
