"""Compilation context and the per-run parameter buffer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from jsql.compile.base import SQLCompiler


@dataclass(frozen=True)
class CompilationContext:
    """Immutable context for a single compilation run.

    Attributes:
        compiler: Dialect-specific SQL compiler instance.
    """

    compiler: SQLCompiler


@dataclass
class ParamBuffer:
    """Accumulates bound values during a single compilation run.

    One buffer is threaded through every clause builder and every nested
    statement.  Clauses render in textual order, so appending while
    rendering keeps the i-th value aligned with the i-th placeholder.
    """

    placeholder: str = "?"
    values: list[Any] = field(default_factory=list)

    def add(self, value: Any) -> str:
        """Store a value and return its placeholder."""
        self.values.append(value)
        return self.placeholder
