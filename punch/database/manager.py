#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the punch ledger.

Provides the PunchDB class for interacting with the SQLite store.
Handles:
    - Initialization of the database engine and sessionmaker
    - Schema migrations through the ordinal migration engine
    - Transaction scopes with automatic rollback
    - Entity managers bound to the active session

Notes
==============
- The store is local and single-process; no locking beyond SQLite's own
- All timestamps are stored as UTC ISO-8601 text (see ``types.py``)
- Foreign keys are enforced on every connection
- DDL runs inside real transactions so migrations are atomic
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from punch.core.exceptions import DatabaseError
from punch.core.logging_manager import PunchLogger, safe_logger
from .managers import ProjectManager, TagManager, TimesliceManager
from .migration_engine import MigrationEngine
from .schema import MIGRATIONS


def build_engine(db_path: Union[str, Path]) -> Engine:
    """
    Create a SQLite engine configured for punch.

    Every new DBAPI connection gets ``PRAGMA foreign_keys = ON`` and has
    pysqlite's implicit transaction handling switched off; transactions
    are opened with an explicit ``BEGIN`` instead, which makes DDL
    transactional as well.
    """
    engine = create_engine(f"sqlite:///{db_path}", echo=False, future=True)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


# ----- Main Database Manager -----
class PunchDB:
    """
    Main database manager for the punch ledger.

    Attributes:
        db_path: Filesystem path to the SQLite database file
        logger: Optional PunchLogger
        engine: SQLAlchemy engine instance
        SessionLocal: SQLAlchemy session factory

    Usage:
        db = PunchDB("~/.local/share/punch/punch.sqlite")
        with db.session_scope():
            project = db.projects.get_or_create("website")
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
        verbose: bool = False,
        migrate: bool = True,
        logger: Optional[PunchLogger] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path: Path to the SQLite file (created if missing)
            log_dir: Directory for log files (optional)
            verbose: Echo debug logging to the console
            migrate: Bring the schema up to date immediately
            logger: Use this logger instead of creating one from ``log_dir``
        """
        self.db_path = Path(db_path).expanduser().resolve()

        if logger is not None:
            self.logger: Optional[PunchLogger] = logger
        elif log_dir:
            self.logger = PunchLogger(
                Path(log_dir).expanduser(), component_name="database", verbose=verbose
            )
        else:
            self.logger = None

        self._project_manager: Optional[ProjectManager] = None
        self._tag_manager: Optional[TagManager] = None
        self._timeslice_manager: Optional[TimesliceManager] = None

        self._setup_engine()
        self.migration_engine = MigrationEngine(self.engine, self.logger)

        if migrate:
            self.migrate()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        log = safe_logger(self.logger)
        log.log_operation("database_init_start", {"db_path": str(self.db_path)})
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self.engine: Engine = build_engine(self.db_path)
            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
                future=True,
            )
        except Exception as e:
            log.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    # ---- Migrations ----
    def migrate(self) -> List[int]:
        """
        Apply all pending schema migrations.

        Returns:
            Ordinals applied by this call

        Raises:
            MigrationFailure: If a migration fails; earlier migrations of
                the same run stay applied, the failing one is rolled back
        """
        applied = self.migration_engine.run_all(MIGRATIONS)
        if applied:
            safe_logger(self.logger).log_operation(
                "schema_migrated", {"applied": applied}
            )
        return applied

    def migration_history(self) -> List[Tuple[int, datetime]]:
        """Applied migrations as ``(ordinal, executed_on)`` pairs."""
        return self.migration_engine.applied()

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around a unit of work.

        The entity managers (``db.projects``, ``db.tags``,
        ``db.timeslices``) are bound to the session for the duration of
        the block. Commits on success; rolls back and re-raises on error.
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        log = safe_logger(self.logger)

        self._project_manager = ProjectManager(session, self.logger)
        self._tag_manager = TagManager(session, self.logger)
        self._timeslice_manager = TimesliceManager(session, self.logger)

        log.log_debug("session_start", {"session_id": session_id})
        try:
            yield session
            session.commit()
            log.log_debug("session_commit", {"session_id": session_id})
        except Exception as e:
            session.rollback()
            log.log_error(e, {"operation": "session_rollback", "session_id": session_id})
            raise
        finally:
            self._project_manager = None
            self._tag_manager = None
            self._timeslice_manager = None
            session.close()

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    @property
    def projects(self) -> ProjectManager:
        """
        ProjectManager bound to the active session.

        Raises:
            DatabaseError: If accessed outside of session_scope
        """
        if self._project_manager is None:
            raise DatabaseError("ProjectManager requires an active session_scope")
        return self._project_manager

    @property
    def tags(self) -> TagManager:
        if self._tag_manager is None:
            raise DatabaseError("TagManager requires an active session_scope")
        return self._tag_manager

    @property
    def timeslices(self) -> TimesliceManager:
        if self._timeslice_manager is None:
            raise DatabaseError("TimesliceManager requires an active session_scope")
        return self._timeslice_manager
