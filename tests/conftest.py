"""Shared pytest fixtures for jsql unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest

from jsql import QueryBuilder, TableSchema, db, define_table, op
from tests.fixtures import ORDERS, POSTS, USERS, load_ddl


@pytest.fixture(scope="session")
def users_schema() -> TableSchema:
    return define_table("users", ["id", "name", "age", "active"])


@pytest.fixture()
def big_spenders() -> QueryBuilder:
    """Subquery: ids of users with an order above 100."""
    return db("orders").select("user_id").where({"total": op.gt(100)})


@pytest.fixture()
def conn() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite database seeded with users, posts and orders."""
    connection = sqlite3.connect(":memory:")
    connection.row_factory = sqlite3.Row
    connection.executescript(load_ddl())
    connection.executemany("INSERT INTO users VALUES (?,?,?,?)", USERS)
    connection.executemany("INSERT INTO posts VALUES (?,?,?,?)", POSTS)
    connection.executemany("INSERT INTO orders VALUES (?,?,?)", ORDERS)
    connection.commit()
    yield connection
    connection.close()
