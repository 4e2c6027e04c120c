"""Unit tests for StatementCompiler via QueryBuilder.to_sql()."""

from __future__ import annotations

from jsql import OperatorExpression, QueryBuilder, db, op
from jsql.schema.expressions import Direction


def _aligned(builder: QueryBuilder) -> bool:
    sql, params = builder.to_sql()
    return len(sql.split("?")) == len(params) + 1


# ---------------------------------------------------------------------------
# SELECT
# ---------------------------------------------------------------------------


def test_basic_select():
    sql, params = (
        db("users")
        .select("id", "name")
        .where({"age": op.gt(30), "active": op.eq(True)})
        .to_sql()
    )
    assert sql == "SELECT id, name FROM users WHERE (age > ? AND active = ?)"
    assert params == [30, True]


def test_table_without_verb_defaults_to_select_star():
    r = db("users").to_sql()
    assert r.sql == "SELECT * FROM users"
    assert r.params == []


def test_select_without_fields_is_wildcard():
    assert db("users").select("id").select().to_sql().sql == "SELECT * FROM users"


def test_from_is_alias_of_table():
    assert db().select("id").from_("users").to_sql().sql == "SELECT id FROM users"
    assert db().table("users").to_sql().sql == "SELECT * FROM users"


def test_select_overwrites_columns():
    r = db("users").select("id").select("name", "age").to_sql()
    assert r.sql == "SELECT name, age FROM users"


def test_scalar_value_is_implicit_equality():
    sql, params = db("users").where({"name": "Alice"}).to_sql()
    assert sql == "SELECT * FROM users WHERE (name = ?)"
    assert params == ["Alice"]


def test_where_groups_are_and_joined():
    sql, params = (
        db("users")
        .where({"active": True})
        .or_where({"age": op.lt(18), "role": "admin"})
        .to_sql()
    )
    assert sql == "SELECT * FROM users WHERE (active = ?) AND (age < ? OR role = ?)"
    assert params == [True, 18, "admin"]


def test_or_where_first_still_and_joined_with_later_groups():
    sql, _ = db("users").or_where({"a": 1, "b": 2}).where({"c": 3}).to_sql()
    assert sql == "SELECT * FROM users WHERE (a = ? OR b = ?) AND (c = ?)"


def test_empty_where_mapping_adds_no_group():
    assert db("users").where({}).to_sql().sql == "SELECT * FROM users"


def test_all_comparison_operators():
    sql, params = (
        db("t")
        .where(
            {
                "a": op.eq(1),
                "b": op.ne(2),
                "c": op.gt(3),
                "d": op.gte(4),
                "e": op.lt(5),
                "f": op.lte(6),
                "g": op.like("%x%"),
            }
        )
        .to_sql()
    )
    assert sql == (
        "SELECT * FROM t WHERE "
        "(a = ? AND b != ? AND c > ? AND d >= ? AND e < ? AND f <= ? AND g LIKE ?)"
    )
    assert params == [1, 2, 3, 4, 5, 6, "%x%"]


def test_in_list_expands_placeholders():
    sql, params = db("users").where({"id": op.in_([1, 2, 3])}).to_sql()
    assert sql == "SELECT * FROM users WHERE (id IN (?, ?, ?))"
    assert params == [1, 2, 3]


def test_in_scalar_single_placeholder():
    sql, params = db("users").where({"id": op.in_(7)}).to_sql()
    assert sql == "SELECT * FROM users WHERE (id IN (?))"
    assert params == [7]


def test_in_subquery(big_spenders):
    sql, params = db("users").where({"id": op.in_(big_spenders)}).to_sql()
    assert sql == (
        "SELECT * FROM users WHERE "
        "(id IN (SELECT user_id FROM orders WHERE (total > ?)))"
    )
    assert params == [100]


def test_subquery_params_precede_later_siblings(big_spenders):
    sql, params = (
        db("users")
        .where({"active": True, "id": op.in_(big_spenders), "age": op.gte(21)})
        .to_sql()
    )
    assert sql == (
        "SELECT * FROM users WHERE (active = ? AND "
        "id IN (SELECT user_id FROM orders WHERE (total > ?)) AND age >= ?)"
    )
    assert params == [True, 100, 21]


def test_bare_subquery_value_compares_with_equality():
    latest = db("orders").select("MAX(total)")
    sql, params = db("orders").where({"total": latest}).to_sql()
    assert sql == "SELECT * FROM orders WHERE (total = (SELECT MAX(total) FROM orders))"
    assert params == []


def test_not_wraps_condition():
    sql, params = db("users").where({"age": op.not_(op.gt(65))}).to_sql()
    assert sql == "SELECT * FROM users WHERE (NOT (age > ?))"
    assert params == [65]


def test_not_nests():
    sql, params = db("users").where({"age": op.not_(op.not_(op.lt(3)))}).to_sql()
    assert sql == "SELECT * FROM users WHERE (NOT (NOT (age < ?)))"
    assert params == [3]


def test_not_in_subquery(big_spenders):
    sql, params = db("users").where({"id": op.not_(op.in_(big_spenders))}).to_sql()
    assert sql == (
        "SELECT * FROM users WHERE "
        "(NOT (id IN (SELECT user_id FROM orders WHERE (total > ?))))"
    )
    assert params == [100]


def test_not_scalar():
    sql, params = db("users").where({"name": op.not_("Bob")}).to_sql()
    assert sql == "SELECT * FROM users WHERE (NOT (name = ?))"
    assert params == ["Bob"]


def test_order_by_last_call_wins():
    r = db("users").order_by("name").order_by("age", "desc").to_sql()
    assert r.sql == "SELECT * FROM users ORDER BY age DESC"


def test_limit_and_offset():
    r = db("users").select("id").order_by("id").limit(10).offset(20).to_sql()
    assert r.sql == "SELECT id FROM users ORDER BY id ASC LIMIT 10 OFFSET 20"


def test_offset_without_limit():
    assert db("users").offset(5).to_sql().sql == "SELECT * FROM users OFFSET 5"


def test_limit_zero_is_emitted():
    assert db("users").limit(0).to_sql().sql == "SELECT * FROM users LIMIT 0"


# ---------------------------------------------------------------------------
# Aggregates, grouping, windows
# ---------------------------------------------------------------------------


def test_aggregates_append_to_projection():
    r = (
        db("orders")
        .select("user_id")
        .count()
        .sum("total", "spent")
        .group_by("user_id")
        .having({"COUNT(*)": op.gt(1)})
        .to_sql()
    )
    assert r.sql == (
        "SELECT user_id, COUNT(*), SUM(total) AS spent FROM orders "
        "GROUP BY user_id HAVING (COUNT(*) > ?)"
    )
    assert r.params == [1]


def test_aggregate_alone_replaces_wildcard():
    r = db("orders").avg("total", "avg_total").min("total").max("total").to_sql()
    assert r.sql == "SELECT AVG(total) AS avg_total, MIN(total), MAX(total) FROM orders"


def test_aggregate_sets_select_after_other_verb():
    r = db("users").delete().count("id", "n").to_sql()
    assert r.sql == "SELECT COUNT(id) AS n FROM users"


def test_select_after_aggregate_overwrites():
    assert db("users").count().select("id").to_sql().sql == "SELECT id FROM users"


def test_ranking_helpers():
    r = (
        db("orders")
        .select("id")
        .row_number("total", "DESC", partition_by="user_id", alias="rn")
        .rank("total")
        .dense_rank("total", alias="dr")
        .to_sql()
    )
    assert r.sql == (
        "SELECT id, "
        "ROW_NUMBER() OVER (PARTITION BY user_id ORDER BY total DESC) AS rn, "
        "RANK() OVER (ORDER BY total ASC), "
        "DENSE_RANK() OVER (ORDER BY total ASC) AS dr "
        "FROM orders"
    )


def test_having_groups_are_and_joined():
    r = (
        db("orders")
        .select("user_id")
        .group_by("user_id")
        .having({"SUM(total)": op.gt(100)})
        .having({"COUNT(*)": op.lte(5)})
        .to_sql()
    )
    assert r.sql.endswith("HAVING (SUM(total) > ?) AND (COUNT(*) <= ?)")
    assert r.params == [100, 5]


def test_group_by_overwrites():
    r = db("t").group_by("a").group_by("b", "c").to_sql()
    assert r.sql == "SELECT * FROM t GROUP BY b, c"


# ---------------------------------------------------------------------------
# JOIN
# ---------------------------------------------------------------------------


def test_left_join_column_pair():
    r = (
        db("users")
        .select("users.*", "posts.title")
        .left_join("posts", "users.id", "posts.user_id")
        .where({"users.active": op.eq(True)})
        .to_sql()
    )
    assert r.sql == (
        "SELECT users.*, posts.title FROM users "
        "LEFT JOIN posts ON users.id = posts.user_id WHERE (users.active = ?)"
    )
    assert r.params == [True]


def test_join_literal_on_string():
    r = db("users").inner_join("posts", "posts.user_id = users.id").to_sql()
    assert r.sql == "SELECT * FROM users INNER JOIN posts ON posts.user_id = users.id"


def test_join_kinds():
    r = (
        db("a")
        .inner_join("b", "a.id", "b.a_id")
        .left_join("c", "a.id", "c.a_id")
        .right_join("d", "a.id", "d.a_id")
        .full_join("e", "a.id", "e.a_id")
        .to_sql()
    )
    assert r.sql == (
        "SELECT * FROM a "
        "INNER JOIN b ON a.id = b.a_id "
        "LEFT JOIN c ON a.id = c.a_id "
        "RIGHT JOIN d ON a.id = d.a_id "
        "FULL JOIN e ON a.id = e.a_id"
    )


def test_join_mapping_binds_values_and_columns():
    r = (
        db("users")
        .left_join("posts", {"posts.user_id": op.col("users.id"), "posts.published": True})
        .to_sql()
    )
    assert r.sql == (
        "SELECT * FROM users LEFT JOIN posts "
        "ON posts.user_id = users.id AND posts.published = ?"
    )
    assert r.params == [True]


def test_join_mapping_with_operator_column_and_subquery(big_spenders):
    r = (
        db("users")
        .inner_join(
            "orders",
            {
                "orders.user_id": op.col("users.id"),
                "orders.total": op.gte(op.col("users.age")),
                "users.id": op.in_(big_spenders),
            },
        )
        .to_sql()
    )
    assert r.sql == (
        "SELECT * FROM users INNER JOIN orders ON orders.user_id = users.id "
        "AND orders.total >= users.age "
        "AND users.id IN (SELECT user_id FROM orders WHERE (total > ?))"
    )
    assert r.params == [100]


def test_join_params_precede_where_params_regardless_of_call_order():
    r = (
        db("users")
        .where({"users.active": True})
        .left_join("posts", {"posts.user_id": op.col("users.id"), "posts.published": 1})
        .having({"COUNT(posts.id)": op.gt(2)})
        .group_by("users.id")
        .to_sql()
    )
    assert r.sql == (
        "SELECT * FROM users LEFT JOIN posts "
        "ON posts.user_id = users.id AND posts.published = ? "
        "WHERE (users.active = ?) GROUP BY users.id HAVING (COUNT(posts.id) > ?)"
    )
    assert r.params == [1, True, 2]


# ---------------------------------------------------------------------------
# CTE
# ---------------------------------------------------------------------------


def test_cte_prologue():
    active = db("users").select("id", "name").where({"active": True})
    r = db("active_users").with_("active_users", active).select("name").to_sql()
    assert r.sql.startswith(
        "WITH active_users AS (SELECT id, name FROM users WHERE (active = ?)) "
    )
    assert r.sql == (
        "WITH active_users AS (SELECT id, name FROM users WHERE (active = ?)) "
        "SELECT name FROM active_users"
    )
    assert r.params == [True]


def test_multiple_ctes_params_in_declaration_order():
    first = db("users").where({"age": op.gt(18)})
    second = db("orders").where({"total": op.lt(50)})
    r = (
        db("adults")
        .with_("adults", first)
        .with_("small", second)
        .where({"adults.name": "Bob"})
        .to_sql()
    )
    assert r.sql == (
        "WITH adults AS (SELECT * FROM users WHERE (age > ?)), "
        "small AS (SELECT * FROM orders WHERE (total < ?)) "
        "SELECT * FROM adults WHERE (adults.name = ?)"
    )
    assert r.params == [18, 50, "Bob"]


def test_cte_before_update():
    stale = db("orders").select("user_id").where({"total": op.lt(10)})
    r = (
        db("users")
        .with_("stale", stale)
        .update({"active": False})
        .where({"id": op.in_(db("stale").select("user_id"))})
        .to_sql()
    )
    assert r.sql == (
        "WITH stale AS (SELECT user_id FROM orders WHERE (total < ?)) "
        "UPDATE users SET active = ? WHERE (id IN (SELECT user_id FROM stale))"
    )
    assert r.params == [10, False]


# ---------------------------------------------------------------------------
# INSERT / UPDATE / DELETE / RETURNING
# ---------------------------------------------------------------------------


def test_insert_single_with_returning():
    sql, params = db("users").insert({"name": "Alice", "age": 25}).returning("id").to_sql()
    assert sql == "INSERT INTO users (name, age) VALUES (?, ?) RETURNING id"
    assert params == ["Alice", 25]


def test_insert_multi_row_heterogeneous_keys():
    sql, params = db("users").insert([{"name": "Bob"}, {"name": "Eve", "age": 28}]).to_sql()
    assert sql == "INSERT INTO users (name, age) VALUES (?, ?), (?, ?)"
    assert params == ["Bob", None, "Eve", 28]


def test_insert_placeholder_count_is_rows_times_columns():
    rows = [{"a": 1}, {"b": 2}, {"c": 3, "a": 4}]
    sql, params = db("t").insert(rows).to_sql()
    assert sql == "INSERT INTO t (a, b, c) VALUES (?, ?, ?), (?, ?, ?), (?, ?, ?)"
    assert sql.count("?") == 9
    assert params == [1, None, None, None, 2, None, 4, None, 3]


def test_insert_copies_rows():
    row = {"name": "Alice"}
    builder = db("users").insert(row)
    row["age"] = 99
    assert builder.to_sql().sql == "INSERT INTO users (name) VALUES (?)"


def test_update_then_where():
    sql, params = db("users").update({"age": 26}).where({"name": op.eq("Alice")}).to_sql()
    assert sql == "UPDATE users SET age = ? WHERE (name = ?)"
    assert params == [26, "Alice"]


def test_update_set_params_precede_where_even_when_where_first():
    sql, params = (
        db("users").where({"id": 1}).update({"name": "Al", "age": 30}).limit(1).to_sql()
    )
    assert sql == "UPDATE users SET name = ?, age = ? WHERE (id = ?) LIMIT 1"
    assert params == ["Al", 30, 1]


def test_delete_with_limit():
    sql, params = db("users").delete().where({"active": op.eq(False)}).limit(10).to_sql()
    assert sql == "DELETE FROM users WHERE (active = ?) LIMIT 10"
    assert params == [False]


def test_delete_returning_wildcard():
    r = db("users").delete().where({"id": 3}).returning().to_sql()
    assert r.sql == "DELETE FROM users WHERE (id = ?) RETURNING *"


def test_last_verb_wins():
    r = db("users").insert({"name": "x"}).update({"name": "y"}).delete().to_sql()
    assert r.sql == "DELETE FROM users"
    assert r.params == []


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


def test_to_sql_is_idempotent(big_spenders):
    builder = (
        db("users")
        .with_("b", big_spenders)
        .left_join("posts", {"posts.user_id": op.col("users.id"), "posts.published": 1})
        .where({"id": op.in_(big_spenders)})
        .having({"COUNT(*)": op.gt(1)})
    )
    first = builder.to_sql()
    second = builder.to_sql()
    assert first.sql == second.sql
    assert first.params == second.params


def test_placeholders_align_with_params(big_spenders):
    builders = [
        db("users").where({"a": 1}).or_where({"b": op.in_([1, 2]), "c": op.not_(3)}),
        db("users").insert([{"a": 1}, {"b": 2}]),
        db("users").update({"a": 1}).where({"id": op.in_(big_spenders)}),
        db("users").with_("x", big_spenders).inner_join("p", {"p.id": 5}).having({"n": 2}),
    ]
    assert all(_aligned(b) for b in builders)


def test_compiled_sql_carries_dialect():
    assert db("users").to_sql().dialect == "postgres"
    assert db("users").dialect("sqlite").to_sql().dialect == "sqlite"
    assert db("users").dialect("mysql").to_sql().dialect == "mysql"


def test_placeholders_uniform_across_dialects():
    for name in ("postgres", "sqlite", "mysql"):
        r = db("users").dialect(name).where({"id": 1}).limit(5).offset(10).to_sql()
        assert r.sql == "SELECT * FROM users WHERE (id = ?) LIMIT 5 OFFSET 10"


# ---------------------------------------------------------------------------
# Operand forms
# ---------------------------------------------------------------------------


def test_direction_enum_members_accepted():
    r = (
        db("orders")
        .select("id")
        .row_number("total", Direction.DESC, alias="rn")
        .order_by("id", Direction.DESC)
        .to_sql()
    )
    assert r.sql == (
        "SELECT id, ROW_NUMBER() OVER (ORDER BY total DESC) AS rn "
        "FROM orders ORDER BY id DESC"
    )


def test_raw_in_expression_with_list_expands():
    sql, params = db("users").where({"id": OperatorExpression(op="IN", val=[1, 2])}).to_sql()
    assert sql == "SELECT * FROM users WHERE (id IN (?, ?))"
    assert params == [1, 2]


def test_in_column_reference_is_parenthesized():
    r = db("a").where({"x": op.in_(op.col("b.y"))}).to_sql()
    assert r.sql == "SELECT * FROM a WHERE (x IN (b.y))"
    assert r.params == []


def test_nested_builders_are_compiled_at_parent_compile_time():
    sub = db("orders").select("user_id")
    cte = db("users").select("id")
    parent = db("recent").with_("recent", cte).where({"id": op.in_(sub)})
    sub.where({"total": op.gt(100)})
    cte.where({"active": True})
    r = parent.to_sql()
    assert r.sql == (
        "WITH recent AS (SELECT id FROM users WHERE (active = ?)) "
        "SELECT * FROM recent WHERE (id IN (SELECT user_id FROM orders WHERE (total > ?)))"
    )
    assert r.params == [True, 100]
