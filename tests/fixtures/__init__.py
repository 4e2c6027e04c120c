"""Test fixtures: sample DDL and seed rows."""

from __future__ import annotations

from pathlib import Path

_FIXTURES_DIR = Path(__file__).parent

USERS = [
    (1, "Alice", 25, 1),
    (2, "Bob", 35, 1),
    (3, "Eve", 41, 0),
    (4, "Mallory", 52, 1),
]

POSTS = [
    (1, 1, "Hello", 1),
    (2, 1, "Draft", 0),
    (3, 2, "Sql tips", 1),
    (4, 4, "Secrets", 1),
]

ORDERS = [
    (1, 1, 40.0),
    (2, 2, 150.0),
    (3, 2, 20.0),
    (4, 4, 300.0),
]


def load_ddl() -> str:
    """Return the sample SQLite DDL script."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()
