"""Utility modules.

This package provides shared utilities used across the codebase.
"""

from .time import format_ts_utc_z

__all__ = [
    "format_ts_utc_z",
]
