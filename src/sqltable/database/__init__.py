"""Public interface for the database package.

This module exposes the primitives needed by application code: the
catalog inspector, table descriptors with their conflict policies, the
table registry, connection helpers, and the error taxonomy.
"""

from .catalog import CatalogEntry, catalog_entries, tables
from .connection import get_connection
from .errors import (
    DatabaseError,
    IntegrityError,
    SerializationError,
    StorageError,
)
from .registry import TableRegistry
from .table import Conflict, ConflictKind, Table

__all__ = [
    "CatalogEntry",
    "catalog_entries",
    "tables",
    "get_connection",
    "DatabaseError",
    "IntegrityError",
    "SerializationError",
    "StorageError",
    "TableRegistry",
    "Conflict",
    "ConflictKind",
    "Table",
]
