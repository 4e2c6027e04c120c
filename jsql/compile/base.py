"""Compiler abstractions: CompiledSQL and the SQLCompiler ABC.

``SQLCompiler`` is the dialect switch point.  Every built-in dialect emits
``?`` placeholders and ``LIMIT`` / ``OFFSET`` pagination today; subclasses
override :meth:`SQLCompiler.render_pagination` when a dialect diverges
(``OFFSET ... FETCH NEXT``, ``OFFSET`` before ``LIMIT``, ...).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any


@dataclass
class CompiledSQL:
    """The output of a successful compilation.

    Unpacks as a ``(sql, params)`` pair::

        sql, params = db("users").select("id").to_sql()

    Attributes:
        sql: The compiled SQL string with ``?`` placeholders.
        params: Bound values; the i-th value binds to the i-th ``?``.
        dialect: The dialect the statement was compiled for.
    """

    sql: str
    params: list[Any]
    dialect: str

    def __iter__(self) -> Iterator[Any]:
        yield self.sql
        yield self.params


class SQLCompiler(ABC):
    """Abstract base for dialect-specific SQL compilers.

    :class:`~jsql.compile.builder.StatementCompiler` uses this interface for
    every dialect-dependent fragment.
    """

    #: Positional placeholder emitted for every bound value.
    PLACEHOLDER = "?"

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (e.g. ``'postgres'``)."""

    def param_placeholder(self) -> str:
        """Return the SQL placeholder for the next bound value."""
        return self.PLACEHOLDER

    def render_pagination(self, limit: int | None, offset: int | None) -> list[str]:
        """Return the pagination fragments, in emission order.

        Args:
            limit: Maximum row count, or ``None``.
            offset: Rows to skip, or ``None``.  May be set without ``limit``.

        Returns:
            Zero, one or two SQL fragments.
        """
        parts: list[str] = []
        if limit is not None:
            parts.append(f"LIMIT {limit}")
        if offset is not None:
            parts.append(f"OFFSET {offset}")
        return parts
