"""Optional table schema hints.

A :class:`TableSchema` names a table and its columns.  Passing one to
:func:`jsql.db` seeds the table name and lets the builder reject bare column
names the table does not define::

    users = define_table("users", ["id", "name", "age", "active"])
    db(users).select("id", "nickname")   # raises UnknownColumnError

Only plain identifiers are checked; qualified names (``users.id``),
wildcards and expressions (``COUNT(*) AS n``) pass through untouched.
"""
from __future__ import annotations

import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from jsql.errors import UnknownColumnError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class TableSchema(BaseModel):
    """Column metadata for a single table.

    Attributes:
        name: Table name.
        columns: Ordered column names.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    columns: tuple[str, ...] = Field(default_factory=tuple)

    def has_column(self, column: str) -> bool:
        return column in self.columns

    def check_columns(self, fields: Iterable[str]) -> None:
        """Raise if a bare identifier in ``fields`` is not a known column.

        Raises:
            UnknownColumnError: On the first unknown column.
        """
        for field in fields:
            if _IDENTIFIER.match(field) and not self.has_column(field):
                raise UnknownColumnError(self.name, field, list(self.columns))


def define_table(name: str, columns: Iterable[str]) -> TableSchema:
    """Build a :class:`TableSchema` from a name and its column names."""
    return TableSchema(name=name, columns=tuple(columns))
