"""Basic query execution helpers.

These wrap low-level sqlite3 operations with logging and typed return
shapes used by the table helpers. Raw ``sqlite3.Error`` is re-raised;
mapping to the project taxonomy happens in the callers.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Mapping, Sequence
from typing import Any

from .errors import ENGINE_ERRORS

logger = logging.getLogger(__name__)

Params = Sequence[Any] | Mapping[str, Any]


def execute_query(
    conn: sqlite3.Connection,
    sql: str,
    params: Params | None = None,
) -> sqlite3.Cursor:
    """Execute a SQL statement and return the cursor.

    Args:
        conn: Database connection.
        sql: SQL statement string.
        params: Positional sequence or named mapping. Defaults to empty tuple.

    Returns:
        SQLite cursor with query results.

    Raises:
        sqlite3.Error: If execution fails.
        OverflowError: If a bound int does not fit in a SQLite INTEGER.

    Logs:
        - DEBUG: "Executed query: {sql[:80]}" on success.
        - ERROR: "Query execution failed: {exc}" with exception details on failure.
    """
    try:
        cursor = conn.execute(sql, params if params is not None else ())
        logger.debug("Executed query: %s", sql[:80])
        return cursor
    except ENGINE_ERRORS as exc:
        logger.exception("Query execution failed: %s", exc)
        raise


def fetch_rows(
    conn: sqlite3.Connection,
    sql: str,
    params: Params | None = None,
) -> list[dict[str, Any]]:
    """Execute query and return all rows as dicts keyed by column name.

    Column names come from the cursor description, so the connection's
    row_factory is irrelevant. Row order is the order the engine returns.

    Returns:
        List of dictionaries, one per row. Empty list if no rows match.

    Raises:
        sqlite3.Error: If query execution fails.
    """
    cursor = execute_query(conn, sql, params)
    try:
        rows = cursor.fetchall()
        columns = [col[0] for col in cursor.description or ()]
    finally:
        cursor.close()
    return [dict(zip(columns, row)) for row in rows]


def execute_update(
    conn: sqlite3.Connection,
    sql: str,
    params: Params | None = None,
) -> int:
    """Execute INSERT/UPDATE/DELETE/DDL and return number of affected rows.

    Returns:
        Number of rows affected by the operation (-1 for DDL).

    Raises:
        sqlite3.Error: If statement execution fails.

    Logs:
        - DEBUG: "Update affected {rowcount} rows" on success.
    """
    cursor = execute_query(conn, sql, params)
    rowcount = cursor.rowcount
    cursor.close()
    logger.debug("Update affected %s rows", rowcount)
    return rowcount
