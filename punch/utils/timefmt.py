#!/usr/bin/env python3
"""
timefmt.py
----------
Timestamp and duration helpers.

Timestamps are kept timezone-aware in UTC everywhere inside punch and
only converted to local time when a report is rendered.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DAY_FORMAT = "%a %d %B %Y"
DAY_KEY_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"


def utcnow() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """
    Return ``value`` converted to UTC.

    Raises:
        ValueError: If ``value`` is naive
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"Naive datetime not allowed: {value!r}")
    return value.astimezone(timezone.utc)


def from_epoch(seconds: Union[int, float]) -> datetime:
    """Convert Unix epoch seconds (int or float) to an aware UTC datetime."""
    return EPOCH + timedelta(seconds=seconds)


def as_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Convert an aware datetime to ``tz``, or to the system local zone.

    ``astimezone()`` without an argument honours DST for each instant,
    which a fixed offset taken from "now" would not.
    """
    return value.astimezone(tz) if tz is not None else value.astimezone()


def local_day(value: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar day of ``value`` in the given (or local) timezone."""
    return as_local(value, tz).date()


def format_duration(value: timedelta) -> str:
    """
    Format a duration as ``"3h 45m 0s"``.

    Fractions of a second are dropped; hours are not wrapped at 24.
    """
    total = int(value.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{sign}{hours}h {minutes}m {seconds}s"


def format_time(value: datetime, tz: Optional[tzinfo] = None) -> str:
    return as_local(value, tz).strftime(TIME_FORMAT)


def format_day(value: date) -> str:
    return value.strftime(DAY_FORMAT)
