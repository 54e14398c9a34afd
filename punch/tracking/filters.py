#!/usr/bin/env python3
"""
filters.py
----------
Time window applied to reports.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from punch.utils.timefmt import EPOCH, ensure_aware


@dataclass(frozen=True)
class ReportFilter:
    """
    Window on the stop instant of closed slices.

    Attributes:
        from_: Inclusive lower bound; None means the epoch (all time)
        to: Exclusive upper bound; None means open-ended
    """

    from_: Optional[datetime] = None
    to: Optional[datetime] = None

    def __post_init__(self) -> None:
        # Fail on naive bounds here rather than deep inside a query
        if self.from_ is not None:
            ensure_aware(self.from_)
        if self.to is not None:
            ensure_aware(self.to)

    @property
    def lower(self) -> datetime:
        return self.from_ if self.from_ is not None else EPOCH

    @classmethod
    def all_time(cls) -> "ReportFilter":
        return cls()

    @classmethod
    def last_days(cls, days: int, now: datetime) -> "ReportFilter":
        """Slices stopped within ``days`` days before ``now``."""
        return cls(from_=now - timedelta(days=days))
