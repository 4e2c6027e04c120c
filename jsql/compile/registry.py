"""Compiler registry (dialect name -> SQLCompiler class).

The built-in ``postgres``, ``sqlite`` and ``mysql`` compilers are registered
by :mod:`jsql`.  A new dialect is added without touching the builder::

    from jsql.compile.registry import CompilerFactory

    @CompilerFactory.register("mssql")
    class MSSQLCompiler(SQLCompiler):
        ...

    db("users").dialect("mssql")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from jsql.compile.base import SQLCompiler
from jsql.errors import UnsupportedDialectError


class CompilerFactory:
    """Registry mapping dialect names to :class:`SQLCompiler` classes.

    Callers register a compiler class once; the builder creates instances
    on demand via :meth:`create`.
    """

    _compilers: ClassVar[dict[str, type[SQLCompiler]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[SQLCompiler]], type[SQLCompiler]]:
        """Decorator that registers a compiler class under ``name``.

        Args:
            name: The dialect name (e.g. ``"postgres"``).

        Returns:
            A decorator that registers and returns the compiler class.
        """

        def decorator(compiler_cls: type[SQLCompiler]) -> type[SQLCompiler]:
            cls._compilers[name] = compiler_cls
            return compiler_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, compiler_cls: type[SQLCompiler]) -> None:
        """Register a compiler class without using the decorator form."""
        cls._compilers[name] = compiler_cls

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._compilers

    @classmethod
    def create(cls, name: str) -> SQLCompiler:
        """Instantiate the compiler registered for ``name``.

        Raises:
            UnsupportedDialectError: If no compiler is registered for ``name``.
        """
        compiler_cls = cls._compilers.get(name)
        if compiler_cls is None:
            raise UnsupportedDialectError(name, cls.registered_targets())
        return compiler_cls()

    @classmethod
    def registered_targets(cls) -> list[str]:
        """Return the sorted list of registered dialect names."""
        return sorted(cls._compilers)
