"""
conftest.py
-----------
Shared pytest fixtures for punch tests.

Provides fixtures for:
- Temporary database setup and teardown
- A controllable clock
- Ledger, report and import helpers
"""
from datetime import timezone

import pytest

from helpers import FakeClock, utc
from punch.database import PunchDB
from punch.tracking import ReportEngine, TimeLedger, WatsonImporter


# ----- Database Fixtures -----

@pytest.fixture
def db_path(tmp_path):
    """Temporary database path."""
    return tmp_path / "punch.sqlite"


@pytest.fixture
def db(db_path):
    """
    Migrated PunchDB instance.

    The engine is disposed after the test.
    """
    database = PunchDB(db_path)
    yield database
    database.dispose()


@pytest.fixture
def store(db):
    """PunchDB with an open session_scope; managers available as db.projects etc."""
    with db.session_scope():
        yield db


# ----- Tracking Fixtures -----

@pytest.fixture
def clock():
    return FakeClock(utc(2020, 9, 12, 8, 20, 0))


@pytest.fixture
def ledger(db, clock):
    return TimeLedger(db, clock=clock)


@pytest.fixture
def reports(db):
    """ReportEngine bucketing days in UTC so results do not depend on the host zone."""
    return ReportEngine(db, tz=timezone.utc)


@pytest.fixture
def importer(db):
    return WatsonImporter(db)
