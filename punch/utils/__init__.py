"""
Utilities package for punch.

- timefmt: timestamp conversion and duration/time formatting

Import commonly-used helpers directly from this package:
    from punch.utils import utcnow, format_duration
"""
from .timefmt import (
    EPOCH,
    as_local,
    ensure_aware,
    format_day,
    format_duration,
    format_time,
    from_epoch,
    local_day,
    utcnow,
)

__all__ = [
    "EPOCH",
    "as_local",
    "ensure_aware",
    "format_day",
    "format_duration",
    "format_time",
    "from_epoch",
    "local_day",
    "utcnow",
]
