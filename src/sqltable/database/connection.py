"""Database connection helpers.

This module provides a small, synchronous API for obtaining SQLite
connections. Table operations never open connections themselves; callers
obtain one here (or anywhere else) and pass it in.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from .. import global_config as g

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


def _ensure_parent_dir(db_path: Path) -> None:
    """Ensure the parent directory for a database file exists."""
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _configure_connection(conn: sqlite3.Connection, *, busy_timeout_ms: int) -> None:
    """Apply standard pragmas to a new connection.

    Configures the connection by:
    - Enabling foreign key constraints
    - Setting the busy timeout, so lock waits end with "database is locked"
      instead of blocking forever

    Args:
        conn: SQLite connection to configure.
        busy_timeout_ms: Milliseconds to wait on a locked database.

    Side Effects:
        - Modifies connection pragmas.
    """
    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute(f"PRAGMA busy_timeout = {int(busy_timeout_ms)}")


def get_connection(
    db_path: Path | str | None = None,
    *,
    busy_timeout_ms: int | None = None,
) -> sqlite3.Connection:
    """Return a configured SQLite connection.

    Creates a new SQLite connection with standard configuration (foreign
    keys enabled, busy timeout). Ensures parent directory exists before
    creating the database file. ``":memory:"`` opens an in-memory database.

    Args:
        db_path: Path to SQLite database file. Defaults to
            global_config.DEFAULT_DB_PATH.
        busy_timeout_ms: Busy timeout in milliseconds. Defaults to
            global_config.BUSY_TIMEOUT_MS.

    Returns:
        Configured SQLite connection ready for use.

    Logs:
        - DEBUG: "Opening SQLite database at {path}" when creating connection.

    Side Effects:
        - Creates parent directory if it doesn't exist.
        - Creates database file if it doesn't exist.
    """
    timeout = g.BUSY_TIMEOUT_MS if busy_timeout_ms is None else busy_timeout_ms

    if db_path == MEMORY:
        logger.debug("Opening in-memory SQLite database")
        conn = sqlite3.connect(MEMORY)
    else:
        resolved = Path(db_path) if db_path is not None else g.DEFAULT_DB_PATH
        _ensure_parent_dir(resolved)
        logger.debug("Opening SQLite database at %s", resolved)
        conn = sqlite3.connect(str(resolved))

    _configure_connection(conn, busy_timeout_ms=timeout)
    return conn
