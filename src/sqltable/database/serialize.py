"""Conversion between structured records and SQLite parameters/rows.

Records may be pydantic models, dataclasses or TypedDicts. Conversion is
delegated to pydantic's TypeAdapter, with a final pass that turns Python
values into something sqlite3 can bind. Every failure is raised as
SerializationError.
"""

from __future__ import annotations

import enum
import functools
import uuid
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from pathlib import PurePath
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from ..utils.time import format_ts_utc_z
from .errors import SerializationError, serialization_error

R = TypeVar("R")

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

_PLAIN_TYPES = (float, str, bytes, type(None))


@functools.cache
def _adapter(record_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(record_type)


def to_sql_value(value: Any) -> Any:
    """Convert a dumped Python value to a value sqlite3 can bind.

    Raises:
        SerializationError: If the value has no column representation.
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, enum.Enum):
        return to_sql_value(value.value)
    if isinstance(value, int):
        if not SQLITE_INT_MIN <= value <= SQLITE_INT_MAX:
            raise SerializationError(
                f"Serialization error integer {value} is outside the SQLite INTEGER range"
            )
        return value
    if isinstance(value, _PLAIN_TYPES):
        return value
    if isinstance(value, datetime):
        try:
            return format_ts_utc_z(value)
        except ValueError as exc:
            raise serialization_error(exc) from exc
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (uuid.UUID, Decimal, PurePath)):
        return str(value)
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise SerializationError(
        f"Serialization error unsupported value of type {type(value).__name__}"
    )


def _dump(record: Any) -> Mapping[str, Any]:
    try:
        dumped = _adapter(type(record)).dump_python(record, mode="python")
    except (PydanticSerializationError, ValidationError, TypeError) as exc:
        raise serialization_error(exc) from exc

    if not isinstance(dumped, Mapping):
        raise SerializationError(
            f"Serialization error {type(record).__name__} is not a structured record"
        )
    return dumped


def to_params(record: Any) -> dict[str, Any]:
    """Decompose a record into a mapping of column name to bindable value.

    Args:
        record: A pydantic model, dataclass instance or mapping.

    Returns:
        Dictionary of field name to SQLite-bindable value.

    Raises:
        SerializationError: If the record is not a structured value or a field
            value cannot be represented in a column.
    """
    return {str(key): to_sql_value(value) for key, value in _dump(record).items()}


def select_params(record: Any, fields: Sequence[str]) -> dict[str, Any]:
    """Return the named parameters for ``fields`` taken from ``record``.

    Raises:
        SerializationError: If ``fields`` is empty or names a field the record
            does not have.
    """
    if not fields:
        raise SerializationError("Serialization error no fields requested")
    dumped = _dump(record)
    missing = [name for name in fields if name not in dumped]
    if missing:
        raise SerializationError(
            f"Serialization error {type(record).__name__} has no field(s) "
            + ", ".join(missing)
        )
    return {name: to_sql_value(dumped[name]) for name in fields}


def from_row(record_type: type[R], row: Mapping[str, Any]) -> R:
    """Build a ``record_type`` instance from one result row.

    Extra columns are ignored; missing columns and type mismatches fail.

    Raises:
        SerializationError: If the row cannot be mapped onto the record type.
    """
    try:
        return _adapter(record_type).validate_python(dict(row))
    except (ValidationError, TypeError) as exc:
        raise serialization_error(exc) from exc
