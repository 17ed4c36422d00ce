"""Catalog inspection.

Reads the engine's metadata to discover which tables exist. Nothing here
is cached: every call re-reads the catalog, so callers must query again
after structural changes.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import NamedTuple

from . import queries
from .errors import from_sqlite_error

logger = logging.getLogger(__name__)

# PRAGMA table_list appeared in SQLite 3.37.0; older engines ignore it silently.
TABLE_LIST_MIN_VERSION = (3, 37, 0)


class CatalogEntry(NamedTuple):
    """One catalog entry: schema, entity name, and entity kind."""

    schema: str
    name: str
    kind: str


def _table_list_entries(conn: sqlite3.Connection) -> list[CatalogEntry]:
    # 1: schema, 2: (table) name, 3: type
    cursor = queries.execute_query(conn, "PRAGMA table_list")
    try:
        return [CatalogEntry(row[0], row[1], row[2]) for row in cursor.fetchall()]
    finally:
        cursor.close()


def _schema_master_entries(conn: sqlite3.Connection) -> list[CatalogEntry]:
    entries: list[CatalogEntry] = []
    cursor = queries.execute_query(conn, "PRAGMA database_list")
    try:
        schemas = [row[1] for row in cursor.fetchall()]
    finally:
        cursor.close()

    for schema in schemas:
        quoted = schema.replace('"', '""')
        cursor = queries.execute_query(
            conn, f'SELECT name, type FROM "{quoted}".sqlite_master'  # noqa: S608
        )
        try:
            entries.extend(CatalogEntry(schema, name, kind) for name, kind in cursor.fetchall())
        finally:
            cursor.close()
    return entries


def catalog_entries(conn: sqlite3.Connection) -> list[CatalogEntry]:
    """Return every catalog entry visible on the connection.

    Uses ``PRAGMA table_list`` where available, which reports tables, views,
    shadow and virtual tables. Older engines fall back to each attached
    schema's ``sqlite_master``, which also lists indexes and triggers.

    Args:
        conn: Open database connection.

    Returns:
        List of CatalogEntry triples in engine order.

    Raises:
        StorageError: If the metadata query fails (e.g. closed connection).
    """
    try:
        if sqlite3.sqlite_version_info >= TABLE_LIST_MIN_VERSION:
            return _table_list_entries(conn)
        return _schema_master_entries(conn)
    except sqlite3.Error as exc:
        raise from_sqlite_error(exc) from exc


def tables(conn: sqlite3.Connection) -> set[str]:
    """Return the names of all entities of kind ``table`` in the database.

    Views, indexes and other catalog entry kinds are excluded.

    Args:
        conn: Open database connection.

    Returns:
        Set of table names (no ordering guarantee).

    Raises:
        StorageError: If the metadata query fails.
    """
    names = {entry.name for entry in catalog_entries(conn) if entry.kind == "table"}
    logger.debug("Catalog lists %d table(s)", len(names))
    return names
