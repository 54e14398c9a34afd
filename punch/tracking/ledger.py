#!/usr/bin/env python3
"""
ledger.py
---------
The time-ledger state machine.

States:
    Idle                                   no running timeslice
    Running(timeslice_id, project, start)  exactly one running timeslice

Transitions:
    start(project, tags)  Idle -> Running
    stop()                Running -> Idle

``start`` while Running and ``stop`` while Idle are not errors: they
report the current state and write nothing.

The current state is never cached in memory; it is read from the store
on every call (``TimesliceManager.find_open``), so it survives process
restarts. The single-running-slice rule is checked here before any write
and additionally backed by a unique partial index in the schema.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional, Tuple, Union

# --- Local imports ---
from punch.core.logging_manager import PunchLogger, safe_logger
from punch.database.manager import PunchDB
from punch.database.managers import OpenTimeslice, unique_titles
from punch.utils.timefmt import utcnow


@dataclass(frozen=True)
class Idle:
    """No timeslice is running."""


@dataclass(frozen=True)
class Running:
    """A timeslice is running."""

    timeslice_id: int
    project: str
    started_on: datetime

    @classmethod
    def from_open(cls, open_slice: OpenTimeslice) -> "Running":
        return cls(open_slice.id, open_slice.project_title, open_slice.started_on)

    def elapsed(self, now: datetime) -> timedelta:
        return now - self.started_on


LedgerState = Union[Idle, Running]


@dataclass(frozen=True)
class StartResult:
    """
    Outcome of ``TimeLedger.start``.

    Attributes:
        started: False when a slice was already running (nothing written)
        running: The slice that is running after the call
        tags: Tags assigned to the new slice (empty when not started)
    """

    started: bool
    running: Running
    tags: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StopResult:
    """
    Outcome of ``TimeLedger.stop``.

    Attributes:
        stopped: False when nothing was running (nothing written)
        stopped_slice: The slice that was closed
        stopped_on: Stop instant written
    """

    stopped: bool
    stopped_slice: Optional[Running] = None
    stopped_on: Optional[datetime] = None

    @property
    def duration(self) -> Optional[timedelta]:
        if self.stopped_slice is None or self.stopped_on is None:
            return None
        return self.stopped_on - self.stopped_slice.started_on


class TimeLedger:
    """
    Starts and stops timeslices against a PunchDB.

    Attributes:
        db: Store to operate on
        clock: Returns the current aware instant (injectable for tests)
        logger: Optional logger
    """

    def __init__(
        self,
        db: PunchDB,
        clock: Callable[[], datetime] = utcnow,
        logger: Optional[PunchLogger] = None,
    ) -> None:
        self.db = db
        self.clock = clock
        self.logger = logger

    def status(self) -> LedgerState:
        with self.db.session_scope():
            open_slice = self.db.timeslices.find_open()
        return Idle() if open_slice is None else Running.from_open(open_slice)

    def start(self, project_name: str, tags: Iterable[str] = ()) -> StartResult:
        """
        Start a new slice for ``project_name`` with ``tags``.

        Project and tags are created on first reference. Everything runs
        in one transaction: on failure no slice, project, tag or
        assignment is left behind.

        Returns:
            StartResult; ``started`` is False if a slice was already
            running, in which case nothing was written

        Raises:
            ValidationError: If the project name or a tag is blank
            DatabaseError: If the store rejects a write
        """
        log = safe_logger(self.logger)
        tag_titles = unique_titles(tags)

        with self.db.session_scope():
            open_slice = self.db.timeslices.find_open()
            if open_slice is not None:
                log.log_info(
                    "start_ignored_already_running",
                    {"timeslice_id": open_slice.id, "project": open_slice.project_title},
                )
                return StartResult(started=False, running=Running.from_open(open_slice))

            project = self.db.projects.get_or_create(project_name)
            timeslice = self.db.timeslices.create(project.id, self.clock())
            for title in tag_titles:
                tag = self.db.tags.get_or_create(title, project.id)
                self.db.timeslices.assign_tag(tag.id, timeslice.id)

            running = Running(timeslice.id, project.title, timeslice.started_on)

        log.log_operation(
            "timeslice_started",
            {"timeslice_id": running.timeslice_id, "project": running.project, "tags": tag_titles},
        )
        return StartResult(started=True, running=running, tags=tuple(tag_titles))

    def stop(self) -> StopResult:
        """
        Stop the running slice.

        Returns:
            StopResult; ``stopped`` is False if nothing was running, in
            which case nothing was written
        """
        log = safe_logger(self.logger)

        with self.db.session_scope():
            open_slice = self.db.timeslices.find_open()
            if open_slice is None:
                log.log_info("stop_ignored_no_running_slice")
                return StopResult(stopped=False)

            stopped_on = self.clock()
            self.db.timeslices.close(open_slice.id, stopped_on)

        result = StopResult(
            stopped=True, stopped_slice=Running.from_open(open_slice), stopped_on=stopped_on
        )
        log.log_operation(
            "timeslice_stopped",
            {"timeslice_id": open_slice.id, "duration_seconds": result.duration.total_seconds()},
        )
        return result
