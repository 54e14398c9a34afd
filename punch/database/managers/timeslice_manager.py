#!/usr/bin/env python3
"""
timeslice_manager.py
--------------------
Creation, closing and tag assignment of Timeslice rows.

Key Features:
    - create(): open (running) or closed slices
    - close(): conditional update, refuses already-closed slices
    - assign_tag(): write a timeslice_tag row
    - find_open(): point lookup of the running slice, joined to its project
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# --- Third party imports ---
from sqlalchemy import func, insert, select, update

# --- Local imports ---
from punch.core.exceptions import TimesliceNotOpen
from punch.core.logging_manager import safe_logger
from punch.database.decorators import handle_db_errors, log_database_operation
from punch.database.models import Project, Timeslice, timeslice_tag
from .base_manager import BaseManager


@dataclass(frozen=True)
class OpenTimeslice:
    """The running slice as seen by the ledger."""

    id: int
    started_on: datetime
    project_title: str


class TimesliceManager(BaseManager):
    """Manages Timeslice entities and their tag associations."""

    @handle_db_errors
    @log_database_operation("create_timeslice")
    def create(
        self,
        project_id: int,
        started_on: datetime,
        stopped_on: Optional[datetime] = None,
    ) -> Timeslice:
        """
        Insert a timeslice.

        Args:
            project_id: Owning project
            started_on: Aware start instant
            stopped_on: Aware stop instant; None stores NULL (running)

        Raises:
            ConstraintViolation: If the project does not exist, or a second
                running slice would be created
        """
        timeslice = Timeslice(
            project_id=project_id, started_on=started_on, stopped_on=stopped_on
        )
        self.session.add(timeslice)
        self.session.flush()
        return timeslice

    @handle_db_errors
    @log_database_operation("close_timeslice")
    def close(self, timeslice_id: int, stopped_on: datetime) -> None:
        """
        Set the stop instant of a running slice.

        The update only matches rows whose ``stopped_on`` is still NULL, so
        a second stop never overwrites the first.

        Raises:
            TimesliceNotOpen: If no running slice has this id
        """
        result = self.session.execute(
            update(Timeslice)
            .where(Timeslice.id == timeslice_id, Timeslice.stopped_on.is_(None))
            .values(stopped_on=stopped_on)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise TimesliceNotOpen(f"Timeslice {timeslice_id} is not running")
        # Loaded instances still carry stopped_on=None
        self.session.expire_all()

    @handle_db_errors
    def assign_tag(self, tag_id: int, timeslice_id: int) -> None:
        """
        Attach a tag to a timeslice.

        No de-duplication happens here; callers pass each tag once.
        """
        self.session.execute(
            insert(timeslice_tag).values(tag_id=tag_id, timeslice_id=timeslice_id)
        )
        safe_logger(self.logger).log_debug(
            "tag_assigned", {"tag_id": tag_id, "timeslice_id": timeslice_id}
        )

    def find_open(self) -> Optional[OpenTimeslice]:
        """
        The running slice, if any.

        At most one row can match, so this is a point lookup rather than
        an ordered scan.
        """
        row = self.session.execute(
            select(Timeslice.id, Timeslice.started_on, Project.title)
            .join(Project, Timeslice.project_id == Project.id)
            .where(Timeslice.stopped_on.is_(None))
            .limit(1)
        ).first()
        if row is None:
            return None
        return OpenTimeslice(id=row[0], started_on=row[1], project_title=row[2])

    def count(self) -> int:
        return self._count(Timeslice)

    def count_open(self) -> int:
        return self.session.scalar(
            select(func.count()).select_from(Timeslice).where(Timeslice.stopped_on.is_(None))
        ) or 0

    def count_assignments(self) -> int:
        return self.session.scalar(
            select(func.count()).select_from(timeslice_tag)
        ) or 0
