"""Timestamp text for values at rest.

Records may carry tz-aware datetimes; the serialization layer stores them
as UTC instant strings. Whole-second instants use the canonical
``YYYY-MM-DDTHH:MM:SSZ`` form, sub-second instants keep their
microseconds (``YYYY-MM-DDTHH:MM:SS.ffffffZ``) so nothing is lost.
"""

from __future__ import annotations

from datetime import UTC, datetime


def format_ts_utc_z(dt: datetime) -> str:
    """Format an aware datetime as a UTC instant string with a Z suffix.

    Converts any aware datetime to UTC before formatting.

    Args:
        dt: Datetime to format. Must be timezone-aware.

    Returns:
        ``YYYY-MM-DDTHH:MM:SSZ`` when the microsecond is 0, otherwise
        ``YYYY-MM-DDTHH:MM:SS.ffffffZ``.

    Raises:
        ValueError: If dt is naive (no timezone).
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Cannot format naive datetime {dt}. "
            "Attach a timezone before persisting it."
        )

    timespec = "seconds" if dt.microsecond == 0 else "microseconds"
    iso_str = dt.astimezone(UTC).isoformat(timespec=timespec)
    if iso_str.endswith("+00:00"):
        return iso_str[:-6] + "Z"
    return iso_str + "Z"
