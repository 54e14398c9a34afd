#!/usr/bin/env python3
"""
test_report_engine.py
---------------------
Tests for ReportEngine log/summary reports and their rendering.

Usage:
    python -m pytest tests/unit/tracking/test_report_engine.py -v
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, datetime, timedelta, timezone

# --- Third-party imports ---
import click
import pytest

# --- Local imports ---
from helpers import utc
from punch.tracking import (
    ALL_PERIOD,
    GroupingMode,
    ReportEngine,
    ReportFilter,
    render_log,
    render_summary,
)


# =========================================================================
# Helpers
# =========================================================================


def add_slice(db, project, started_on, stopped_on, tags=()):
    """Insert one slice with its project and tags; returns the slice id."""
    with db.session_scope():
        owner = db.projects.get_or_create(project)
        timeslice = db.timeslices.create(owner.id, started_on, stopped_on)
        for title in tags:
            tag = db.tags.get_or_create(title, owner.id)
            db.timeslices.assign_tag(tag.id, timeslice.id)
        return timeslice.id


@pytest.fixture
def website_morning(db):
    """08:20 to 12:05 on website, tagged backend and admin."""
    return add_slice(
        db, "website", utc(2020, 9, 12, 8, 20), utc(2020, 9, 12, 12, 5), ["backend", "admin"]
    )


# =========================================================================
# Log
# =========================================================================


class TestLog:
    """Tests for ReportEngine.log."""

    def test_empty_store(self, reports):
        assert reports.log() == []

    def test_single_slice(self, reports, website_morning):
        days = reports.log()

        assert len(days) == 1
        assert days[0].day == date(2020, 9, 12)
        entry = days[0].entries[0]
        assert entry.timeslice_id == website_morning
        assert entry.project == "website"
        assert entry.tags == ("backend", "admin")
        assert entry.duration == timedelta(hours=3, minutes=45)

    def test_running_slice_excluded(self, db, reports, website_morning):
        add_slice(db, "website", utc(2020, 9, 12, 13), None)
        assert [e.timeslice_id for d in reports.log() for e in d.entries] == [website_morning]

    def test_bucketed_by_stop_day(self, db, reports):
        add_slice(db, "night", utc(2020, 9, 11, 23), utc(2020, 9, 12, 1))
        assert [d.day for d in reports.log()] == [date(2020, 9, 12)]

    def test_bucketed_in_report_timezone(self, db):
        add_slice(db, "website", utc(2020, 9, 12, 20), utc(2020, 9, 12, 23))
        plus_two = ReportEngine(db, tz=timezone(timedelta(hours=2)))
        assert [d.day for d in plus_two.log()] == [date(2020, 9, 13)]

    def test_days_ascending_entries_by_start(self, db, reports):
        add_slice(db, "b", utc(2020, 9, 13, 10), utc(2020, 9, 13, 11))
        add_slice(db, "a", utc(2020, 9, 12, 9), utc(2020, 9, 12, 12))
        add_slice(db, "c", utc(2020, 9, 12, 8), utc(2020, 9, 12, 13))

        days = reports.log()

        assert [d.day for d in days] == [date(2020, 9, 12), date(2020, 9, 13)]
        assert [e.project for e in days[0].entries] == ["c", "a"]
        assert days[0].total == timedelta(hours=8)

    def test_zero_duration_slice(self, db, reports):
        add_slice(db, "website", utc(2020, 9, 12, 8), utc(2020, 9, 12, 8))
        entry = reports.log()[0].entries[0]
        assert entry.duration == timedelta(0)

    def test_filter_bounds(self, db, reports):
        add_slice(db, "early", utc(2020, 9, 1, 8), utc(2020, 9, 1, 9))
        add_slice(db, "edge", utc(2020, 9, 5, 8), utc(2020, 9, 5, 9))
        add_slice(db, "late", utc(2020, 9, 10, 8), utc(2020, 9, 10, 9))

        window = ReportFilter(from_=utc(2020, 9, 5, 9), to=utc(2020, 9, 10, 9))
        projects = [e.project for d in reports.log(window) for e in d.entries]

        # from_ is inclusive, to is exclusive
        assert projects == ["edge"]

    def test_last_days_filter(self, db, reports):
        add_slice(db, "old", utc(2020, 9, 1, 8), utc(2020, 9, 1, 9))
        add_slice(db, "recent", utc(2020, 9, 11, 8), utc(2020, 9, 11, 9))

        window = ReportFilter.last_days(7, utc(2020, 9, 12, 12))
        assert [e.project for d in reports.log(window) for e in d.entries] == ["recent"]

    def test_naive_filter_rejected(self):
        with pytest.raises(ValueError):
            ReportFilter(from_=datetime(2020, 9, 12))


# =========================================================================
# Summary
# =========================================================================


class TestSummary:
    """Tests for ReportEngine.summarize."""

    def test_empty_store(self, reports):
        assert reports.summarize() == []
        assert reports.summarize(GroupingMode.ALL) == []

    def test_single_slice(self, reports, website_morning):
        periods = reports.summarize()

        assert [p.key for p in periods] == ["2020-09-12"]
        project = periods[0].projects[0]
        assert project.title == "website"
        assert project.total == timedelta(hours=3, minutes=45)
        assert project.timeslice_ids == [website_morning]
        assert [(t.title, t.total) for t in project.tags] == [
            ("backend", timedelta(hours=3, minutes=45)),
            ("admin", timedelta(hours=3, minutes=45)),
        ]

    def test_per_tag_totals_within_project_total(self, db, reports):
        add_slice(db, "website", utc(2020, 9, 12, 8), utc(2020, 9, 12, 9), ["backend", "admin"])
        add_slice(db, "website", utc(2020, 9, 12, 10), utc(2020, 9, 12, 12), ["backend"])
        add_slice(db, "website", utc(2020, 9, 12, 13), utc(2020, 9, 12, 13, 30))

        project = reports.summarize()[0].projects[0]

        assert project.total == timedelta(hours=3, minutes=30)
        assert {t.title: t.total for t in project.tags} == {
            "backend": timedelta(hours=3),
            "admin": timedelta(hours=1),
        }
        for tag in project.tags:
            assert tag.total <= project.total

    def test_projects_by_most_recent_stop(self, db, reports):
        add_slice(db, "alpha", utc(2020, 9, 12, 8), utc(2020, 9, 12, 10))
        add_slice(db, "beta", utc(2020, 9, 12, 10), utc(2020, 9, 12, 12))
        add_slice(db, "alpha", utc(2020, 9, 12, 6), utc(2020, 9, 12, 7))

        projects = reports.summarize()[0].projects
        assert [p.title for p in projects] == ["beta", "alpha"]
        assert projects[1].total == timedelta(hours=3)

    def test_case_distinct_projects(self, db, reports):
        add_slice(db, "website", utc(2020, 9, 12, 8), utc(2020, 9, 12, 9))
        add_slice(db, "Website", utc(2020, 9, 12, 9), utc(2020, 9, 12, 10))

        titles = [p.title for p in reports.summarize()[0].projects]
        assert sorted(titles) == ["Website", "website"]

    def test_day_periods_ascending(self, db, reports):
        add_slice(db, "website", utc(2020, 9, 13, 8), utc(2020, 9, 13, 9))
        add_slice(db, "website", utc(2020, 9, 12, 8), utc(2020, 9, 12, 9))

        assert [p.key for p in reports.summarize()] == ["2020-09-12", "2020-09-13"]

    def test_tag_breakdown_limited_to_its_day(self, db, reports):
        add_slice(db, "website", utc(2020, 9, 12, 8), utc(2020, 9, 12, 10), ["backend"])
        add_slice(db, "website", utc(2020, 9, 13, 8), utc(2020, 9, 13, 9), ["backend", "ops"])
        add_slice(db, "website", utc(2020, 9, 13, 10), utc(2020, 9, 13, 10, 30), ["ops"])

        day_a, day_b = reports.summarize()

        first = day_a.projects[0]
        assert day_a.key == "2020-09-12"
        assert first.total == timedelta(hours=2)
        assert [(t.title, t.total) for t in first.tags] == [("backend", timedelta(hours=2))]

        second = day_b.projects[0]
        assert day_b.key == "2020-09-13"
        assert second.total == timedelta(hours=1, minutes=30)
        assert [(t.title, t.total) for t in second.tags] == [
            ("backend", timedelta(hours=1)),
            ("ops", timedelta(hours=1, minutes=30)),
        ]

    def test_all_mode_single_period(self, db, reports):
        add_slice(db, "website", utc(2020, 9, 13, 8), utc(2020, 9, 13, 9), ["backend"])
        add_slice(db, "website", utc(2020, 9, 12, 8), utc(2020, 9, 12, 10), ["backend"])

        periods = reports.summarize(GroupingMode.ALL)

        assert [p.key for p in periods] == [ALL_PERIOD]
        project = periods[0].projects[0]
        assert project.total == timedelta(hours=3)
        assert project.tags[0].total == timedelta(hours=3)

    def test_total_is_sum_not_span(self, db, reports):
        add_slice(db, "website", utc(2020, 9, 12, 8), utc(2020, 9, 12, 9))
        add_slice(db, "website", utc(2020, 9, 12, 17), utc(2020, 9, 12, 18))
        assert reports.summarize()[0].projects[0].total == timedelta(hours=2)

    def test_running_slice_excluded(self, db, reports, website_morning):
        add_slice(db, "website", utc(2020, 9, 12, 13), None, ["backend"])
        project = reports.summarize()[0].projects[0]
        assert project.timeslice_ids == [website_morning]


# =========================================================================
# Rendering
# =========================================================================


class TestRendering:
    """Tests for the text renderers."""

    def test_render_log(self, reports, website_morning):
        lines = [click.unstyle(line) for line in render_log(reports.log(), timezone.utc)]

        assert lines[0] == "2020-09-12  Sat 12 September 2020"
        assert lines[1] == f"    08:20:00 - 12:05:00  {'3h 45m 0s':>12}  website (backend, admin)"
        assert lines[2] == ""

    def test_render_log_without_tags(self, db, reports):
        add_slice(db, "website", utc(2020, 9, 12, 8), utc(2020, 9, 12, 9))
        lines = [click.unstyle(line) for line in render_log(reports.log(), timezone.utc)]
        assert lines[1].endswith("  website")

    def test_render_summary(self, reports, website_morning):
        lines = [click.unstyle(line) for line in render_summary(reports.summarize())]

        assert lines[0] == "2020-09-12"
        assert lines[1] == f"    {'website':<20} {'3h 45m 0s':>14}"
        assert lines[2] == f"        {'backend':<16} {'3h 45m 0s':>14}"
        assert lines[3] == f"        {'admin':<16} {'3h 45m 0s':>14}"
        assert lines[4] == ""

    def test_render_empty(self):
        assert render_log([]) == []
        assert render_summary([]) == []
