"""Tests for record/row conversion."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import BaseModel

from sqltable.database.errors import SerializationError
from sqltable.database.serialize import from_row, select_params, to_params, to_sql_value


class Level(enum.IntEnum):
    LOW = 1
    HIGH = 2


class Reading(BaseModel):
    sensor: str
    level: Level
    ok: bool
    taken: datetime


@pytest.mark.unit
class TestToSqlValue:
    """Tests for single-value conversion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, None),
            (3, 3),
            (1.5, 1.5),
            ("s", "s"),
            (b"\x00", b"\x00"),
            (True, 1),
            (False, 0),
            (Level.HIGH, 2),
            (date(2024, 1, 2), "2024-01-02"),
            (datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC), "2024-01-02T03:04:05Z"),
            (datetime(2024, 1, 2, 3, 4, 5, 7, tzinfo=UTC), "2024-01-02T03:04:05.000007Z"),
            (2**63 - 1, 2**63 - 1),
            (-(2**63), -(2**63)),
            (Decimal("1.10"), "1.10"),
            (Path("a/b"), "a/b"),
            (bytearray(b"ab"), b"ab"),
        ],
    )
    def test_supported(self, value: object, expected: object) -> None:
        assert to_sql_value(value) == expected

    def test_uuid(self) -> None:
        value = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert to_sql_value(value) == "12345678-1234-5678-1234-567812345678"

    @pytest.mark.parametrize("value", [2**63, -(2**63) - 1, 2**100])
    def test_out_of_range_integer(self, value: int) -> None:
        with pytest.raises(SerializationError, match="INTEGER range"):
            to_sql_value(value)

    @pytest.mark.parametrize("value", [[1], {"a": 1}, {1, 2}, object()])
    def test_unsupported(self, value: object) -> None:
        with pytest.raises(SerializationError, match="unsupported value"):
            to_sql_value(value)


@pytest.mark.unit
class TestParams:
    """Tests for record decomposition."""

    def test_model(self) -> None:
        reading = Reading(
            sensor="s1",
            level=Level.LOW,
            ok=False,
            taken=datetime(2024, 5, 6, 7, 8, 9, tzinfo=UTC),
        )
        assert to_params(reading) == {
            "sensor": "s1",
            "level": 1,
            "ok": 0,
            "taken": "2024-05-06T07:08:09Z",
        }

    def test_select_params_keeps_requested_order(self) -> None:
        @dataclass
        class Point:
            x: int
            y: int
            z: int

        params = select_params(Point(1, 2, 3), ["z", "x"])
        assert list(params) == ["z", "x"]
        assert params == {"z": 3, "x": 1}


@pytest.mark.unit
class TestFromRow:
    """Tests for row conversion."""

    def test_model(self) -> None:
        row = {"sensor": "s1", "level": 2, "ok": 1, "taken": "2024-05-06T07:08:09Z"}
        reading = from_row(Reading, row)
        assert reading.level is Level.HIGH
        assert reading.ok is True
        assert reading.taken == datetime(2024, 5, 6, 7, 8, 9, tzinfo=UTC)

    def test_missing_column(self) -> None:
        with pytest.raises(SerializationError) as excinfo:
            from_row(Reading, {"sensor": "s1"})
        assert excinfo.value.cause is not None

    def test_unsupported_record_type(self) -> None:
        class Opaque:
            def __init__(self, value: int) -> None:
                self.value = value

        with pytest.raises(SerializationError):
            from_row(Opaque, {"value": 1})
