"""SQLite dialect compiler."""
from __future__ import annotations

from jsql.compile.base import SQLCompiler


class SQLiteCompiler(SQLCompiler):
    """Compiles statements for SQLite.

    Parameter style: ``?``, Python's built-in ``sqlite3`` qmark style
    (``cursor.execute(sql, params)``).

    Note: ``RETURNING`` needs SQLite 3.35+ and ``FULL JOIN`` needs 3.39+.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"
