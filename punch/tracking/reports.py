#!/usr/bin/env python3
"""
reports.py
----------
Read-only reports over closed timeslices.

Two report shapes:

Log
    Closed slices stopped inside a ReportFilter window, bucketed by the
    local calendar day of their stop instant::

        2020-09-12  Sat 12 September 2020
            08:20:00 - 12:05:00     3h 45m 0s  website (backend, admin)

Summary
    Total time per project per period (one day, or a single "All"
    bucket), each with a per-tag breakdown over exactly the slices of
    that project and period::

        2020-09-12
            website                 3h 45m 0s
                backend             3h 45m 0s

Running slices never appear in either report. Durations are wall-clock
``stopped_on - started_on`` summed in Python, so a group total is the
sum of its slices, not the span between its first and last instant.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Dict, List, Optional, Tuple

# --- Third party imports ---
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload

# --- Local imports ---
from punch.core import colors
from punch.core.logging_manager import PunchLogger, safe_logger
from punch.database.decorators import handle_db_errors, log_database_operation
from punch.database.manager import PunchDB
from punch.database.models import Timeslice
from punch.utils.timefmt import (
    DAY_KEY_FORMAT,
    format_day,
    format_duration,
    format_time,
    local_day,
)
from .filters import ReportFilter

ALL_PERIOD = "All"


class GroupingMode(Enum):
    """How the summary buckets slices."""

    DAY = "day"
    ALL = "all"


# ----- Report rows -----

@dataclass(frozen=True)
class LogEntry:
    timeslice_id: int
    started_on: datetime
    stopped_on: datetime
    project: str
    tags: Tuple[str, ...] = ()

    @property
    def duration(self) -> timedelta:
        return self.stopped_on - self.started_on


@dataclass
class LogDay:
    day: date
    entries: List[LogEntry] = field(default_factory=list)

    @property
    def total(self) -> timedelta:
        return sum((entry.duration for entry in self.entries), timedelta())


@dataclass
class TagSummary:
    tag_id: int
    title: str
    total: timedelta = field(default_factory=timedelta)


@dataclass
class ProjectSummary:
    """
    Totals for one project within one period.

    Attributes:
        project_id: Project primary key
        title: Project title
        total: Sum of the durations of the slices in the group
        last_stopped_on: Latest stop instant in the group (ordering key)
        timeslice_ids: Slices that make up the group
        tags: Per-tag totals over exactly those slices
    """

    project_id: int
    title: str
    total: timedelta = field(default_factory=timedelta)
    last_stopped_on: Optional[datetime] = None
    timeslice_ids: List[int] = field(default_factory=list)
    tags: List[TagSummary] = field(default_factory=list)


@dataclass
class SummaryPeriod:
    key: str
    projects: List[ProjectSummary] = field(default_factory=list)


# ----- Engine -----

class ReportEngine:
    """
    Builds log and summary reports from a PunchDB.

    Attributes:
        db: Store to read from
        tz: Timezone for day bucketing and display; None means local
        logger: Optional logger
    """

    def __init__(
        self,
        db: PunchDB,
        tz: Optional[tzinfo] = None,
        logger: Optional[PunchLogger] = None,
    ) -> None:
        self.db = db
        self.tz = tz
        self.logger = logger

    @staticmethod
    def _closed_slices(session: Session, report_filter: ReportFilter) -> List[Timeslice]:
        query = (
            select(Timeslice)
            .options(joinedload(Timeslice.project), selectinload(Timeslice.tags))
            .where(
                Timeslice.stopped_on.is_not(None),
                Timeslice.stopped_on >= report_filter.lower,
            )
            .order_by(Timeslice.stopped_on, Timeslice.id)
        )
        if report_filter.to is not None:
            query = query.where(Timeslice.stopped_on < report_filter.to)
        return list(session.scalars(query))

    @handle_db_errors
    @log_database_operation("log_report")
    def log(self, report_filter: Optional[ReportFilter] = None) -> List[LogDay]:
        """
        Closed slices in the window, grouped by local stop day.

        Returns:
            Days in ascending order; entries within a day by start instant.
            Empty list for an empty store.
        """
        report_filter = report_filter or ReportFilter()
        days: Dict[date, LogDay] = {}

        with self.db.session_scope() as session:
            for timeslice in self._closed_slices(session, report_filter):
                day = local_day(timeslice.stopped_on, self.tz)
                days.setdefault(day, LogDay(day)).entries.append(
                    LogEntry(
                        timeslice_id=timeslice.id,
                        started_on=timeslice.started_on,
                        stopped_on=timeslice.stopped_on,
                        project=timeslice.project.title,
                        tags=tuple(tag.title for tag in timeslice.tags),
                    )
                )

        for log_day in days.values():
            log_day.entries.sort(key=lambda e: (e.started_on, e.timeslice_id))
        return [days[day] for day in sorted(days)]

    def _period_key(self, timeslice: Timeslice, mode: GroupingMode) -> str:
        if mode is GroupingMode.ALL:
            return ALL_PERIOD
        return local_day(timeslice.stopped_on, self.tz).strftime(DAY_KEY_FORMAT)

    @handle_db_errors
    @log_database_operation("summary_report")
    def summarize(
        self,
        mode: GroupingMode = GroupingMode.DAY,
        report_filter: Optional[ReportFilter] = None,
    ) -> List[SummaryPeriod]:
        """
        Per-period, per-project totals with per-tag breakdown.

        Ordering:
            periods ascending; projects by most recent stop instant,
            descending (ties by title); tags by tag id

        Returns:
            Empty list for an empty store.
        """
        report_filter = report_filter or ReportFilter()
        periods: Dict[str, "OrderedDict[int, ProjectSummary]"] = {}
        tag_totals: Dict[Tuple[str, int], "OrderedDict[int, TagSummary]"] = {}

        with self.db.session_scope() as session:
            for timeslice in self._closed_slices(session, report_filter):
                key = self._period_key(timeslice, mode)
                duration = timeslice.duration

                projects = periods.setdefault(key, OrderedDict())
                summary = projects.get(timeslice.project_id)
                if summary is None:
                    summary = ProjectSummary(timeslice.project_id, timeslice.project.title)
                    projects[timeslice.project_id] = summary

                summary.total += duration
                summary.timeslice_ids.append(timeslice.id)
                if summary.last_stopped_on is None or timeslice.stopped_on > summary.last_stopped_on:
                    summary.last_stopped_on = timeslice.stopped_on

                tags = tag_totals.setdefault((key, timeslice.project_id), OrderedDict())
                # A slice counts at most once per tag
                for tag in {t.id: t for t in timeslice.tags}.values():
                    tags.setdefault(tag.id, TagSummary(tag.id, tag.title)).total += duration

        result = []
        for key in sorted(periods):
            projects = list(periods[key].values())
            for summary in projects:
                summary.tags = sorted(
                    tag_totals[(key, summary.project_id)].values(), key=lambda t: t.tag_id
                )
            projects.sort(key=lambda p: p.title)
            projects.sort(key=lambda p: p.last_stopped_on, reverse=True)
            result.append(SummaryPeriod(key, projects))

        safe_logger(self.logger).log_debug(
            "summary_built", {"mode": mode.value, "periods": len(result)}
        )
        return result


# ----- Rendering -----

def render_log(days: List[LogDay], tz: Optional[tzinfo] = None) -> List[str]:
    """Colored text lines for a log report."""
    lines: List[str] = []
    for log_day in days:
        lines.append(colors.heading(
            f"{log_day.day.strftime(DAY_KEY_FORMAT)}  {format_day(log_day.day)}"
        ))
        for entry in log_day.entries:
            line = (
                f"    {colors.time(format_time(entry.started_on, tz))} - "
                f"{colors.time(format_time(entry.stopped_on, tz))}  "
                f"{colors.duration(f'{format_duration(entry.duration):>12}')}  "
                f"{colors.project(entry.project)}"
            )
            if entry.tags:
                line += f" ({colors.tag(', '.join(entry.tags))})"
            lines.append(line)
        lines.append("")
    return lines


def render_summary(periods: List[SummaryPeriod]) -> List[str]:
    """Colored text lines for a summary report."""
    lines: List[str] = []
    for period in periods:
        lines.append(colors.heading(period.key))
        for project in period.projects:
            lines.append(
                f"    {colors.project(f'{project.title:<20}')} "
                f"{colors.duration(f'{format_duration(project.total):>14}')}"
            )
            for tag in project.tags:
                lines.append(
                    f"        {colors.tag(f'{tag.title:<16}')} "
                    f"{colors.duration(f'{format_duration(tag.total):>14}')}"
                )
        lines.append("")
    return lines
