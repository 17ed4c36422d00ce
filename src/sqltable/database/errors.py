"""Exception taxonomy for table operations.

Every failure raised by this package is one of two kinds, both wrapping
the underlying cause verbatim:

- ``StorageError``: anything raised by the SQLite engine (statement
  preparation, execution, catalog inspection, closed connections).
- ``SerializationError``: anything raised while converting a record to
  named parameters or a result row back to a record.
"""

from __future__ import annotations

import sqlite3


class DatabaseError(Exception):
    """Base exception for table-related errors.

    Attributes:
        cause: The wrapped underlying exception, or None.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StorageError(DatabaseError):
    """Raised when the storage engine rejects or fails a statement."""


class IntegrityError(StorageError):
    """Raised when a constraint violation is not absorbed by the conflict policy."""


class SerializationError(DatabaseError):
    """Raised when a record and a row cannot be converted into each other."""


# Errors raised while preparing or executing a statement. sqlite3 raises
# OverflowError when a bound int does not fit in a 64-bit INTEGER.
ENGINE_ERRORS = (sqlite3.Error, OverflowError)


def from_sqlite_error(error: sqlite3.Error | OverflowError) -> StorageError:
    """Map a raw sqlite3 error to a project-level StorageError.

    IntegrityError is mapped to IntegrityError, all others (including
    OverflowError from parameter binding) to StorageError.
    Callers should raise the result ``from`` the original error.

    Args:
        error: SQLite or binding exception to convert.

    Returns:
        StorageError or IntegrityError instance carrying the original error.
    """
    if isinstance(error, sqlite3.IntegrityError):
        return IntegrityError(f"SQLite error {error}", cause=error)
    return StorageError(f"SQLite error {error}", cause=error)


def serialization_error(error: Exception) -> SerializationError:
    """Wrap a conversion failure into a SerializationError."""
    return SerializationError(f"Serialization error {error}", cause=error)
