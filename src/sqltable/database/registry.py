"""Application-owned registry of table descriptors.

Build one ``TableRegistry`` at startup, register each record type's
``Table`` on it, and pass it to the code that needs the descriptors::

    registry = TableRegistry()
    accounts = registry.register(Table("accounts", "acct TEXT PRIMARY KEY, name TEXT"))

    with contextlib.closing(get_connection()) as conn:
        registry.setup(conn, force=False)
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator

from .catalog import tables
from .table import Table

logger = logging.getLogger(__name__)


class TableRegistry:
    """Ordered collection of Table descriptors keyed by name."""

    def __init__(self, initial: list[Table] | None = None) -> None:
        self._tables: dict[str, Table] = {}
        for table in initial or ():
            self.register(table)

    def register(self, table: Table) -> Table:
        """Add ``table`` and return it.

        Raises:
            ValueError: If a table with the same name is already registered.
        """
        if table.name in self._tables:
            msg = f"Table already registered: {table.name}"
            raise ValueError(msg)
        self._tables[table.name] = table
        return table

    def get(self, name: str) -> Table:
        """Return the registered table called ``name``.

        Raises:
            KeyError: If no such table is registered.
        """
        return self._tables[name]

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[Table]:
        return iter(self._tables.values())

    def __len__(self) -> int:
        return len(self._tables)

    def setup(self, conn: sqlite3.Connection, force: bool = False) -> None:
        """Create every registered table, in registration order.

        The catalog is read once, before the first table is created.

        Args:
            conn: Open database connection.
            force: Drop and recreate tables that already exist.

        Raises:
            StorageError: If reading the catalog or any DDL statement fails.
                Tables handled before the failure keep their new state.
        """
        existing = tables(conn)
        logger.debug("Setting up %d table(s) (force=%s)", len(self._tables), force)
        for table in self._tables.values():
            table.create(conn, existing, force)
