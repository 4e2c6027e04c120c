"""MySQL dialect compiler."""

from __future__ import annotations

from jsql.compile.base import SQLCompiler


class MySQLCompiler(SQLCompiler):
    """Compiles statements for MySQL.

    Note: MySQL has no ``FULL JOIN`` and no ``RETURNING``; both are emitted
    as requested and rejected by the server, not here.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"
