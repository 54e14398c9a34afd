#!/usr/bin/env python3
"""
test_watson_import.py
---------------------
Tests for decoding and importing Watson frames.

Usage:
    python -m pytest tests/unit/tracking/test_watson_import.py -v
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from datetime import timedelta

# --- Third-party imports ---
import pytest

# --- Local imports ---
from helpers import row_counts, utc
from punch.core.exceptions import MalformedInput
from punch.tracking import decode_frame, read_frames

# 2020-09-12 08:20:00 UTC and 12:05:00 UTC
START = 1599898800
STOP = 1599912300


@pytest.fixture
def frames_file(tmp_path):
    def write(content):
        path = tmp_path / "frames"
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path
    return write


# =========================================================================
# Decoding
# =========================================================================


class TestDecodeFrame:
    """Tests for decode_frame validation."""

    def test_valid_frame(self):
        frame = decode_frame([START, STOP, "website", "abc123", ["backend"], STOP], 0)

        assert frame.start == utc(2020, 9, 12, 8, 20)
        assert frame.stop == utc(2020, 9, 12, 12, 5)
        assert frame.project == "website"
        assert frame.frame_id == "abc123"
        assert frame.tags == ("backend",)

    def test_fractional_seconds(self):
        frame = decode_frame([START, START + 1.5, "website", "x", [], 0], 0)
        assert frame.stop - frame.start == timedelta(seconds=1.5)

    def test_duplicate_tags_collapsed(self):
        frame = decode_frame([START, STOP, "website", "x", ["a", "b", "a"], 0], 0)
        assert frame.tags == ("a", "b")

    @pytest.mark.parametrize(
        "raw",
        [
            {"start": START},
            [START, STOP, "website", "x", []],
            [START, STOP, "website", "x", [], 0, "extra"],
            ["yesterday", STOP, "website", "x", [], 0],
            [START, None, "website", "x", [], 0],
            [True, STOP, "website", "x", [], 0],
            [STOP, START, "website", "x", [], 0],
            [START, STOP, "", "x", [], 0],
            [START, STOP, 42, "x", [], 0],
            [START, STOP, "website", "x", "backend", 0],
            [START, STOP, "website", "x", ["ok", 3], 0],
            [START, STOP, "website", "x", ["  "], 0],
            [float("nan"), float("nan"), "website", "x", [], 0],
            [START, float("inf"), "website", "x", [], 0],
            [1e20, 1e20, "website", "x", [], 0],
            [START, 10 ** 30, "website", "x", [], 0],
        ],
    )
    def test_malformed_frames(self, raw):
        with pytest.raises(MalformedInput) as exc_info:
            decode_frame(raw, 3)
        assert exc_info.value.frame_index == 3
        assert str(exc_info.value).startswith("frame 3: ")


class TestReadFrames:
    """Tests for read_frames file handling."""

    def test_reads_all_frames(self, frames_file):
        path = frames_file([
            [START, STOP, "website", "a", [], STOP],
            [STOP, STOP + 60, "mobile", "b", ["ios"], STOP + 60],
        ])
        assert [f.project for f in read_frames(path)] == ["website", "mobile"]

    def test_invalid_json(self, frames_file):
        with pytest.raises(MalformedInput, match="not valid JSON"):
            read_frames(frames_file("[1, 2,"))

    def test_top_level_not_array(self, frames_file):
        with pytest.raises(MalformedInput, match="array"):
            read_frames(frames_file({"frames": []}))

    @pytest.mark.parametrize(
        "content",
        [
            '[[NaN, NaN, "x", "a", [], 0]]',
            '[[0, Infinity, "x", "a", [], 0]]',
            '[[1e20, 1e20, "x", "a", [], 0]]',
        ],
    )
    def test_out_of_range_epochs(self, frames_file, content):
        with pytest.raises(MalformedInput) as exc_info:
            read_frames(frames_file(content))
        assert exc_info.value.frame_index == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(MalformedInput, match="cannot read"):
            read_frames(tmp_path / "missing")


# =========================================================================
# Import
# =========================================================================


class TestImport:
    """Tests for WatsonImporter."""

    def test_import_single_frame(self, db, importer, reports, frames_file):
        path = frames_file([[START, STOP, "website", "abc", ["backend", "admin"], STOP]])

        assert importer.import_file(path) == 1

        assert row_counts(db) == {"project": 1, "tag": 2, "timeslice": 1, "timeslice_tag": 2}
        entry = reports.log()[0].entries[0]
        assert entry.started_on == utc(2020, 9, 12, 8, 20)
        assert entry.stopped_on == utc(2020, 9, 12, 12, 5)
        assert entry.tags == ("backend", "admin")

    def test_import_reuses_projects_and_tags(self, db, importer, ledger, clock, frames_file):
        ledger.start("website", ["backend"])
        clock.advance(hours=1)
        ledger.stop()

        path = frames_file([
            [START, STOP, "website", "a", ["backend"], STOP],
            [START - 7200, START - 3600, "website", "b", ["backend", "ops"], START],
        ])
        importer.import_file(path)

        assert row_counts(db) == {"project": 1, "tag": 2, "timeslice": 3, "timeslice_tag": 4}

    def test_empty_array(self, db, importer, frames_file):
        assert importer.import_file(frames_file([])) == 0
        assert row_counts(db)["timeslice"] == 0

    def test_malformed_frame_imports_nothing(self, db, importer, frames_file):
        path = frames_file([
            [START, STOP, "website", "a", ["backend"], STOP],
            [START, STOP, "website", "b", "not-a-list", STOP],
        ])

        with pytest.raises(MalformedInput) as exc_info:
            importer.import_file(path)

        assert exc_info.value.frame_index == 1
        assert row_counts(db) == {"project": 0, "tag": 0, "timeslice": 0, "timeslice_tag": 0}

    def test_imported_slices_are_closed(self, db, importer, ledger, frames_file):
        importer.import_file(frames_file([[START, STOP, "website", "a", [], STOP]]))
        with db.session_scope():
            assert db.timeslices.count_open() == 0
        assert ledger.start("website").started is True

    def test_import_alongside_running_slice(self, db, importer, ledger, frames_file):
        ledger.start("mobile")
        importer.import_file(frames_file([[START, STOP, "website", "a", [], STOP]]))

        with db.session_scope():
            assert db.timeslices.count_open() == 1
            assert db.timeslices.count() == 2
