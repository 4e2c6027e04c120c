"""Hand compiled statements to a caller-supplied database client.

jsql does not own connections.  These helpers accept any client exposing one
of two call shapes and normalise the result to a list of rows:

``query(sql, params)``
    Result carries rows as a ``rows`` attribute or ``"rows"`` key
    (node-postgres style, or a ``dict``); anything else is returned as-is.

``execute(sql, params)``
    A ``list`` / ``tuple`` result yields its first element (``[rows,
    fields]`` style); a DB-API cursor yields ``fetchall()``.

Database errors propagate unchanged.  The transaction helpers issue literal
``BEGIN`` / ``COMMIT`` / ``ROLLBACK`` statements through ``client.query`` and
roll back on any exception before re-raising it.
"""
from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from jsql.compile.base import CompiledSQL
from jsql.errors import UnsupportedClientError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def execute(query: Any, client: Any) -> list[Any]:
    """Compile ``query`` (if needed) and run it on ``client``.

    Args:
        query: A :class:`~jsql.query.QueryBuilder` or a :class:`CompiledSQL`.
        client: A database client with ``query`` or ``execute``.

    Returns:
        The result rows.

    Raises:
        ValidationError: If ``query`` does not compile.
        UnsupportedClientError: If ``client`` has neither call shape.
    """
    compiled = _compile(query)
    method, shape = _resolve(client)
    logger.debug("Executing via %s: %s", shape, compiled.sql)
    return _normalize(shape, method(compiled.sql, compiled.params))


async def execute_async(query: Any, client: Any) -> list[Any]:
    """Async form of :func:`execute`; awaits the client call when needed."""
    compiled = _compile(query)
    method, shape = _resolve(client)
    logger.debug("Executing via %s: %s", shape, compiled.sql)
    result = method(compiled.sql, compiled.params)
    if inspect.isawaitable(result):
        result = await result
    return _normalize(shape, result)


def transaction(client: Any, work: Callable[[Any], T]) -> T:
    """Run ``work(client)`` between ``BEGIN`` and ``COMMIT``.

    Any exception raised by ``work`` (or by ``COMMIT``) triggers ``ROLLBACK``
    and is re-raised unchanged, including cancellation and
    ``KeyboardInterrupt``.

    Raises:
        UnsupportedClientError: If ``client`` has no ``query`` method.
    """
    query = _query_method(client)
    query("BEGIN", [])
    logger.debug("Transaction started")
    try:
        result = work(client)
        query("COMMIT", [])
    except BaseException:
        logger.debug("Transaction failed, rolling back", exc_info=True)
        query("ROLLBACK", [])
        raise
    logger.debug("Transaction committed")
    return result


async def transaction_async(client: Any, work: Callable[[Any], Awaitable[T]]) -> T:
    """Async form of :func:`transaction`."""
    query = _query_method(client)
    await _maybe_await(query("BEGIN", []))
    logger.debug("Transaction started")
    try:
        result = await work(client)
        await _maybe_await(query("COMMIT", []))
    except BaseException:
        logger.debug("Transaction failed, rolling back", exc_info=True)
        await _maybe_await(query("ROLLBACK", []))
        raise
    logger.debug("Transaction committed")
    return result


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _compile(query: Any) -> CompiledSQL:
    if isinstance(query, CompiledSQL):
        return query
    return query.to_sql()


def _resolve(client: Any) -> tuple[Callable[..., Any], str]:
    for shape in ("query", "execute"):
        method = getattr(client, shape, None)
        if callable(method):
            return method, shape
    raise UnsupportedClientError(client)


def _query_method(client: Any) -> Callable[..., Any]:
    method = getattr(client, "query", None)
    if not callable(method):
        raise UnsupportedClientError(client)
    return method


def _normalize(shape: str, result: Any) -> list[Any]:
    if shape == "query":
        if isinstance(result, dict) and "rows" in result:
            return list(result["rows"])
        rows = getattr(result, "rows", None)
        if rows is not None:
            return list(rows)
        return result
    if isinstance(result, (list, tuple)):
        if not result:
            return []
        first = result[0]
        return list(first) if isinstance(first, (list, tuple)) else first
    fetchall = getattr(result, "fetchall", None)
    if callable(fetchall):
        return list(fetchall())
    return result


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
