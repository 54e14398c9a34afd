#!/usr/bin/env python3
"""
migration_engine.py
-------------------
Ordinal-based schema migrations.

Each migration is an ``(ordinal, transform)`` pair. The engine keeps a
``schema_migrations`` table and guarantees that every migration without a
record there is executed exactly once, in ascending ordinal order, inside
its own transaction together with the insert of its record.

State per ordinal::

    Pending --apply--> Applied

``Applied`` is terminal. A failing transform rolls back its transaction,
writes no record and aborts the run with MigrationFailure; running again
after fixing the cause is safe.

Note:
    DDL is only transactional on SQLite when the driver's implicit
    transaction handling is disabled. ``punch.database.manager.build_engine``
    sets that up; pass engines created elsewhere at your own risk.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

# --- Third party imports ---
from sqlalchemy import Engine, insert, select
from sqlalchemy.engine import Connection

# --- Local imports ---
from punch.core.exceptions import MigrationFailure
from punch.core.logging_manager import PunchLogger, safe_logger
from punch.utils.timefmt import utcnow
from .models import SchemaMigration

MigrationFunction = Callable[[Connection], None]


@dataclass(frozen=True)
class Migration:
    """
    A single schema change.

    Attributes:
        ordinal: Strictly increasing identifier, never reused
        transform: Callable receiving the open transactional connection
        description: Short human-readable summary
    """

    ordinal: int
    transform: MigrationFunction
    description: str = ""


class MigrationEngine:
    """
    Applies migrations to the store and records them.

    Attributes:
        engine: SQLAlchemy engine of the target store
        logger: Optional logger
        clock: Source of the ``executed_on`` timestamp
    """

    def __init__(
        self,
        engine: Engine,
        logger: Optional[PunchLogger] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.engine = engine
        self.logger = logger
        self.clock = clock

    def ensure_migrations_table(self) -> None:
        """Create the record-keeping table if absent. Safe to call repeatedly."""
        with self.engine.begin() as conn:
            SchemaMigration.__table__.create(conn, checkfirst=True)

    def has_run(self, ordinal: int) -> bool:
        """Whether a record exists for ``ordinal``."""
        with self.engine.connect() as conn:
            row = conn.execute(
                select(SchemaMigration.id).where(SchemaMigration.id == ordinal)
            ).first()
        return row is not None

    def apply(self, ordinal: int, transform: MigrationFunction) -> bool:
        """
        Run ``transform`` and record ``ordinal`` atomically, unless already done.

        Args:
            ordinal: Migration ordinal
            transform: Schema change to execute

        Returns:
            True if the migration ran now, False if it had already been applied

        Raises:
            MigrationFailure: If the transform (or the record insert) fails;
                the transaction is rolled back
        """
        log = safe_logger(self.logger)

        if self.has_run(ordinal):
            log.log_debug("Migration already applied", {"ordinal": ordinal})
            return False

        log.log_info("Applying migration", {"ordinal": ordinal})
        try:
            with self.engine.begin() as conn:
                transform(conn)
                conn.execute(
                    insert(SchemaMigration).values(id=ordinal, executed_on=self.clock())
                )
        except Exception as e:
            log.log_error(e, {"operation": "apply_migration", "ordinal": ordinal})
            raise MigrationFailure(ordinal, str(e)) from e

        log.log_operation("migration_applied", {"ordinal": ordinal})
        return True

    def run_all(self, migrations: Sequence[Migration]) -> List[int]:
        """
        Apply every pending migration in ascending ordinal order.

        Stops at the first failure.

        Returns:
            Ordinals applied by this call (empty when already up to date)

        Raises:
            ValueError: If two migrations share an ordinal
            MigrationFailure: If a migration fails
        """
        ordered = sorted(migrations, key=lambda m: m.ordinal)
        for previous, current in zip(ordered, ordered[1:]):
            if previous.ordinal == current.ordinal:
                raise ValueError(f"Duplicate migration ordinal: {current.ordinal}")

        self.ensure_migrations_table()

        applied = []
        for migration in ordered:
            if self.apply(migration.ordinal, migration.transform):
                applied.append(migration.ordinal)
        return applied

    def applied(self) -> List[Tuple[int, datetime]]:
        """All recorded migrations as ``(ordinal, executed_on)``, ascending."""
        self.ensure_migrations_table()
        with self.engine.connect() as conn:
            rows = conn.execute(
                select(SchemaMigration.id, SchemaMigration.executed_on).order_by(
                    SchemaMigration.id
                )
            ).all()
        return [(row[0], row[1]) for row in rows]
