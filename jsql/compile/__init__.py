"""jsql compilation layer: Statement → parameterized SQL."""
from jsql.compile.base import CompiledSQL, SQLCompiler
from jsql.compile.builder import StatementCompiler
from jsql.compile.mysql import MySQLCompiler
from jsql.compile.postgres import PostgresCompiler
from jsql.compile.registry import CompilerFactory
from jsql.compile.sqlite import SQLiteCompiler

__all__ = [
    "CompiledSQL",
    "CompilerFactory",
    "SQLCompiler",
    "StatementCompiler",
    "MySQLCompiler",
    "PostgresCompiler",
    "SQLiteCompiler",
]
