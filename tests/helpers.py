"""
helpers.py
----------
Small test utilities shared across the suite.
"""
from datetime import datetime, timedelta, timezone


class FakeClock:
    """Clock returning a fixed instant that tests move forward by hand."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def utc(*args) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


def row_counts(db) -> dict:
    """Row counts of every ledger table."""
    with db.session_scope():
        return {
            "project": db.projects.count(),
            "tag": db.tags.count(),
            "timeslice": db.timeslices.count(),
            "timeslice_tag": db.timeslices.count_assignments(),
        }
