#!/usr/bin/env python3
"""
types.py
--------
Custom column types.

SQLite has no native timestamp type and SQLAlchemy's ``DateTime`` drops
the UTC offset on this dialect, so timestamps are stored as fixed-width
ISO-8601 text in UTC::

    2020-09-12T08:20:00.000000+00:00

Fixed width plus a single offset keeps the text lexically sortable, which
the reports rely on for range filters and ``max()``.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone
from typing import Any, Optional

# --- Third party imports ---
from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

# --- Local imports ---
from punch.utils.timefmt import ensure_aware

_STORAGE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f+00:00"


def to_storage(value: datetime) -> str:
    """Serialize an aware datetime to the stored text form."""
    return ensure_aware(value).strftime(_STORAGE_FORMAT)


def from_storage(value: str) -> datetime:
    """Parse the stored text form back into an aware UTC datetime."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        # Rows written by hand without an offset are taken as UTC
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime persisted as sortable UTC ISO-8601 text."""

    impl = String(32)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, datetime):
            raise TypeError(f"Expected datetime, got {type(value).__name__}")
        return to_storage(value)

    def process_result_value(self, value: Optional[str], dialect: Any) -> Optional[datetime]:
        if value is None:
            return None
        return from_storage(value)
