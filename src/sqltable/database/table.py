"""Table descriptors: schema creation, typed insert and typed query.

A ``Table`` pairs a table name with its column-definition clause. It never
opens connections or manages transactions; callers pass an open
``sqlite3.Connection`` to every operation and own commit/rollback.

Identifiers are interpolated into SQL text, not bound. Table names, column
definitions, field lists, predicate fragments and upsert clauses must be
developer-controlled literals; never feed user input into them. Only
values go through parameter binding.

Example::

    @dataclass
    class Account:
        acct: str
        name: str
        fetched: datetime

    ACCOUNTS = Table("accounts", "acct TEXT PRIMARY KEY, name TEXT NOT NULL, fetched TEXT NOT NULL")

    ACCOUNTS.create(conn, tables(conn), force=False)
    ACCOUNTS.insert(conn, account, ["acct", "name", "fetched"], Conflict.REPLACE)
    ACCOUNTS.query(conn, Account, "WHERE acct = ?", [acct])
"""

from __future__ import annotations

import enum
import logging
import sqlite3
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

from . import queries
from .errors import ENGINE_ERRORS, from_sqlite_error
from .queries import Params
from .serialize import from_row, select_params

logger = logging.getLogger(__name__)

R = TypeVar("R")

_RECREATE_SAVEPOINT = "sqltable_recreate"


class ConflictKind(enum.Enum):
    NONE = "NONE"
    IGNORE = "IGNORE"
    ABORT = "ABORT"
    REPLACE = "REPLACE"
    UPSERT = "UPSERT"


@dataclass(frozen=True)
class Conflict:
    """How an insert resolves a uniqueness or constraint violation.

    Use the pre-built ``Conflict.NONE``, ``Conflict.IGNORE``,
    ``Conflict.ABORT`` and ``Conflict.REPLACE`` values, or
    ``Conflict.upsert(clause)`` to append a caller-written
    ``ON CONFLICT ...`` clause verbatim. The clause is not validated.
    """

    kind: ConflictKind
    clause: str | None = None

    NONE: ClassVar[Conflict]
    IGNORE: ClassVar[Conflict]
    ABORT: ClassVar[Conflict]
    REPLACE: ClassVar[Conflict]

    def __post_init__(self) -> None:
        if (self.kind is ConflictKind.UPSERT) != (self.clause is not None):
            msg = "An upsert clause is required for UPSERT and only for UPSERT"
            raise ValueError(msg)

    @classmethod
    def upsert(cls, clause: str) -> Conflict:
        """Return an upsert policy appending ``clause`` after VALUES (...)."""
        return cls(ConflictKind.UPSERT, clause)

    def verb(self) -> str:
        """Return the statement prefix, e.g. ``INSERT OR IGNORE``."""
        if self.kind in (ConflictKind.NONE, ConflictKind.UPSERT):
            return "INSERT"
        return f"INSERT OR {self.kind.value}"


Conflict.NONE = Conflict(ConflictKind.NONE)
Conflict.IGNORE = Conflict(ConflictKind.IGNORE)
Conflict.ABORT = Conflict(ConflictKind.ABORT)
Conflict.REPLACE = Conflict(ConflictKind.REPLACE)


@dataclass(frozen=True)
class Table:
    """Immutable descriptor of one logical table.

    Attributes:
        name: Table identifier, used verbatim in generated SQL.
        definition: Column-declaration clause, passed through to CREATE TABLE.
    """

    name: str
    definition: str

    def __post_init__(self) -> None:
        if not self.name:
            msg = "Table name must not be empty"
            raise ValueError(msg)

    def ddl(self) -> str:
        """Return the CREATE TABLE statement for this table."""
        return f"CREATE TABLE {self.name} ({self.definition})"

    def create(
        self,
        conn: sqlite3.Connection,
        existing_tables: Collection[str],
        force: bool = False,
    ) -> None:
        """Create the table, or recreate it when ``force`` is set.

        If the table is listed in ``existing_tables`` and ``force`` is false,
        nothing happens. If it is listed and ``force`` is true, it is dropped
        and created again, losing all of its rows. Otherwise it is created.

        The forced drop and create run inside one savepoint: if either
        statement fails, the savepoint is rolled back and the previous table
        with its rows is left in place.

        Args:
            conn: Open database connection.
            existing_tables: Catalog snapshot, usually from ``tables(conn)``.
            force: Drop and recreate an existing table.

        Raises:
            StorageError: If DROP or CREATE fails.

        Logs:
            - INFO: "dropping table {name}" before a drop.
            - INFO: "creating table {name}" before a create.
        """
        exists = self.name in existing_tables
        if exists and not force:
            return

        try:
            if exists:
                self._recreate(conn)
            else:
                logger.info("creating table %s", self.name)
                queries.execute_update(conn, self.ddl())
        except sqlite3.Error as exc:
            raise from_sqlite_error(exc) from exc

    def _recreate(self, conn: sqlite3.Connection) -> None:
        queries.execute_update(conn, f"SAVEPOINT {_RECREATE_SAVEPOINT}")
        try:
            logger.info("dropping table %s", self.name)
            queries.execute_update(conn, f"DROP TABLE {self.name}")
            logger.info("creating table %s", self.name)
            queries.execute_update(conn, self.ddl())
        except sqlite3.Error:
            conn.execute(f"ROLLBACK TO {_RECREATE_SAVEPOINT}")
            conn.execute(f"RELEASE {_RECREATE_SAVEPOINT}")
            raise
        queries.execute_update(conn, f"RELEASE {_RECREATE_SAVEPOINT}")

    def drop(self, conn: sqlite3.Connection) -> None:
        """Drop the table if it exists.

        Raises:
            StorageError: If the DROP statement fails.
        """
        logger.info("dropping table %s", self.name)
        try:
            queries.execute_update(conn, f"DROP TABLE IF EXISTS {self.name}")
        except sqlite3.Error as exc:
            raise from_sqlite_error(exc) from exc

    def insert_sql(self, fields: Sequence[str], conflict: Conflict = Conflict.NONE) -> str:
        """Return the INSERT statement text for ``fields`` under ``conflict``."""
        columns = ",".join(fields)
        values = ", ".join(f":{field}" for field in fields)
        sql = f"{conflict.verb()} INTO {self.name} ({columns}) VALUES ({values})"
        if conflict.kind is ConflictKind.UPSERT:
            sql = f"{sql} {conflict.clause}"
        return sql

    def insert(
        self,
        conn: sqlite3.Connection,
        record: Any,
        fields: Sequence[str],
        conflict: Conflict = Conflict.NONE,
    ) -> bool:
        """Insert ``record`` into the table.

        Only ``fields`` are written, bound by name from the serialized record.

        Args:
            conn: Open database connection (caller manages the transaction).
            record: Structured record (pydantic model, dataclass, mapping).
            fields: Ordered column names to write. Developer-controlled only.
            conflict: Conflict resolution policy. Defaults to Conflict.NONE.

        Returns:
            True if a row was inserted or replaced, False if the write was
            suppressed (e.g. ``Conflict.IGNORE`` on a duplicate key).

        Raises:
            SerializationError: If the record lacks a requested field or a
                value cannot be bound.
            IntegrityError: If a constraint violation is not absorbed by the policy.
            StorageError: For any other execution failure.

        Logs:
            - DEBUG: the generated statement text.
        """
        params = select_params(record, fields)
        sql = self.insert_sql(fields, conflict)
        logger.debug("%s", sql)
        try:
            return queries.execute_update(conn, sql, params) != 0
        except ENGINE_ERRORS as exc:
            raise from_sqlite_error(exc) from exc

    def query(
        self,
        conn: sqlite3.Connection,
        record_type: type[R],
        where: str = "",
        params: Params = (),
    ) -> list[R]:
        """Select rows and convert each one into ``record_type``.

        Executes ``SELECT * FROM <name> <where>;``. Rows keep the order the
        engine returns them in. All rows are converted before returning; a
        failure on any row discards the whole result.

        Args:
            conn: Open database connection.
            record_type: Pydantic model, dataclass or TypedDict to build.
            where: Trailing predicate fragment, e.g. ``"WHERE acct = ?"``.
            params: Positional sequence or named mapping for ``where``.

        Returns:
            List of records, empty when nothing matches.

        Raises:
            StorageError: If preparation or execution fails.
            SerializationError: If a row cannot be mapped onto ``record_type``.
        """
        sql = f"SELECT * FROM {self.name} {where};"
        try:
            rows = queries.fetch_rows(conn, sql, params)
        except ENGINE_ERRORS as exc:
            raise from_sqlite_error(exc) from exc
        return [from_row(record_type, row) for row in rows]

    def query_one(
        self,
        conn: sqlite3.Connection,
        record_type: type[R],
        where: str = "",
        params: Params = (),
    ) -> R | None:
        """Return the first record matching ``where``, or None."""
        records = self.query(conn, record_type, where, params)
        return records[0] if records else None

    def count(self, conn: sqlite3.Connection, where: str = "", params: Params = ()) -> int:
        """Return the number of rows matching ``where``.

        Raises:
            StorageError: If preparation or execution fails.
        """
        sql = f"SELECT COUNT(*) FROM {self.name} {where};"
        try:
            cursor = queries.execute_query(conn, sql, params)
            try:
                (n,) = cursor.fetchone()
            finally:
                cursor.close()
        except ENGINE_ERRORS as exc:
            raise from_sqlite_error(exc) from exc
        return int(n)
