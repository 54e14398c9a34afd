#!/usr/bin/env python3
"""
Punch Database Package
----------------------
Persistence core of the punch time ledger.

- manager: PunchDB engine/session owner
- migration_engine: ordinal migrations recorded in schema_migrations
- schema: the concrete migration list
- models: ORM models (Project, Tag, Timeslice, SchemaMigration)
- managers: entity-scoped store operations
"""

from .manager import PunchDB, build_engine
from .migration_engine import Migration, MigrationEngine
from .schema import MIGRATIONS
from punch.core.exceptions import (
    ConstraintViolation,
    DatabaseError,
    MigrationFailure,
    TimesliceNotOpen,
)
from .decorators import handle_db_errors, log_database_operation

__all__ = [
    "PunchDB",
    "build_engine",
    "Migration",
    "MigrationEngine",
    "MIGRATIONS",
    "ConstraintViolation",
    "DatabaseError",
    "MigrationFailure",
    "TimesliceNotOpen",
    "handle_db_errors",
    "log_database_operation",
]
