"""
sqltable core package.

Declare one ``Table`` per record type, create schemas idempotently, and
insert/query pydantic models or dataclasses without per-type binding code:
- Table descriptors, conflict policies and the catalog inspector
  (`sqltable.database`)
- A small Typer-based CLI for inspecting a database (`sqltable.cli`)

Configuration:
- Shared, project-wide anchors live in `sqltable.global_config`.
"""

from .database import (
    Conflict,
    DatabaseError,
    SerializationError,
    StorageError,
    Table,
    TableRegistry,
    tables,
)

__all__ = [
    "Conflict",
    "DatabaseError",
    "SerializationError",
    "StorageError",
    "Table",
    "TableRegistry",
    "tables",
]
