"""Tests for table creation and forced recreation."""

from __future__ import annotations

import logging
import sqlite3

import pytest

from sqltable.database import StorageError, Table, tables

ITEMS = Table("items", "id INTEGER PRIMARY KEY, label TEXT NOT NULL")


def _fill(conn: sqlite3.Connection, n: int) -> None:
    conn.executemany(
        "INSERT INTO items (id, label) VALUES (?, ?)",
        [(i, f"item-{i}") for i in range(n)],
    )
    conn.commit()


@pytest.mark.unit
class TestDescriptor:
    """Tests for the immutable descriptor itself."""

    def test_ddl(self) -> None:
        assert ITEMS.ddl() == "CREATE TABLE items (id INTEGER PRIMARY KEY, label TEXT NOT NULL)"

    def test_is_frozen(self) -> None:
        with pytest.raises(AttributeError):
            ITEMS.name = "other"  # type: ignore[misc]

    def test_rejects_empty_name(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            Table("", "id INTEGER")


@pytest.mark.integration
class TestCreate:
    """Tests for Table.create."""

    def test_creates_absent_table(self, db_conn: sqlite3.Connection) -> None:
        ITEMS.create(db_conn, tables(db_conn))
        assert "items" in tables(db_conn)

    def test_creates_absent_table_with_force(self, db_conn: sqlite3.Connection) -> None:
        ITEMS.create(db_conn, tables(db_conn), force=True)
        assert "items" in tables(db_conn)

    def test_existing_table_is_left_alone(
        self, db_conn: sqlite3.Connection, caplog: pytest.LogCaptureFixture
    ) -> None:
        ITEMS.create(db_conn, tables(db_conn))
        _fill(db_conn, 3)

        caplog.set_level(logging.INFO, logger="sqltable.database.table")
        ITEMS.create(db_conn, tables(db_conn), force=False)
        ITEMS.create(db_conn, tables(db_conn), force=False)

        assert ITEMS.count(db_conn) == 3
        assert "dropping table items" not in caplog.text

    def test_force_recreates_empty(
        self, db_conn: sqlite3.Connection, caplog: pytest.LogCaptureFixture
    ) -> None:
        ITEMS.create(db_conn, tables(db_conn))
        _fill(db_conn, 5)

        caplog.set_level(logging.INFO, logger="sqltable.database.table")
        ITEMS.create(db_conn, tables(db_conn), force=True)

        assert ITEMS.count(db_conn) == 0
        assert "dropping table items" in caplog.text
        assert "creating table items" in caplog.text

    def test_force_applies_new_definition(self, db_conn: sqlite3.Connection) -> None:
        ITEMS.create(db_conn, tables(db_conn))
        wider = Table("items", "id INTEGER PRIMARY KEY, label TEXT NOT NULL, note TEXT")
        wider.create(db_conn, tables(db_conn), force=True)

        columns = [row[1] for row in db_conn.execute("PRAGMA table_info(items)")]
        assert columns == ["id", "label", "note"]

    def test_existence_comes_from_snapshot(self, db_conn: sqlite3.Connection) -> None:
        ITEMS.create(db_conn, set())
        # A stale snapshot that omits the table leads to a CREATE on an existing table.
        with pytest.raises(StorageError, match="already exists"):
            ITEMS.create(db_conn, set())

    def test_malformed_definition_raises_storage_error(self, db_conn: sqlite3.Connection) -> None:
        broken = Table("broken", "id INTEGER PRIMARY KEY,,")
        with pytest.raises(StorageError) as excinfo:
            broken.create(db_conn, tables(db_conn))
        assert isinstance(excinfo.value.cause, sqlite3.OperationalError)
        assert "broken" not in tables(db_conn)

    def test_failed_recreate_keeps_previous_table(self, db_conn: sqlite3.Connection) -> None:
        ITEMS.create(db_conn, tables(db_conn))
        _fill(db_conn, 2)

        broken = Table("items", "id INTEGER PRIMARY KEY,,")
        with pytest.raises(StorageError):
            broken.create(db_conn, tables(db_conn), force=True)

        assert "items" in tables(db_conn)
        assert ITEMS.count(db_conn) == 2
        assert not db_conn.in_transaction


@pytest.mark.integration
def test_drop_removes_table(db_conn: sqlite3.Connection) -> None:
    ITEMS.create(db_conn, tables(db_conn))
    ITEMS.drop(db_conn)
    assert "items" not in tables(db_conn)
    # Dropping again is a no-op.
    ITEMS.drop(db_conn)
