"""
Tests for timestamp and duration helpers.
"""
from datetime import date, datetime, timedelta, timezone

import pytest

from punch.database.types import from_storage, to_storage
from punch.utils.timefmt import (
    EPOCH,
    as_local,
    ensure_aware,
    format_day,
    format_duration,
    format_time,
    from_epoch,
    local_day,
)

PLUS_TWO = timezone(timedelta(hours=2))


class TestFormatDuration:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (timedelta(0), "0h 0m 0s"),
            (timedelta(hours=3, minutes=45), "3h 45m 0s"),
            (timedelta(seconds=59.9), "0h 0m 59s"),
            (timedelta(days=1, hours=2, seconds=5), "26h 0m 5s"),
            (timedelta(minutes=-90), "-1h 30m 0s"),
        ],
    )
    def test_format(self, value, expected):
        assert format_duration(value) == expected


class TestConversions:
    def test_ensure_aware_converts_to_utc(self):
        value = datetime(2020, 9, 12, 10, 20, tzinfo=PLUS_TWO)
        assert ensure_aware(value) == datetime(2020, 9, 12, 8, 20, tzinfo=timezone.utc)
        assert ensure_aware(value).tzinfo == timezone.utc

    def test_ensure_aware_rejects_naive(self):
        with pytest.raises(ValueError):
            ensure_aware(datetime(2020, 9, 12))

    def test_from_epoch(self):
        assert from_epoch(0) == EPOCH
        assert from_epoch(1599898800) == datetime(2020, 9, 12, 8, 20, tzinfo=timezone.utc)

    def test_local_day_in_zone(self):
        late = datetime(2020, 9, 12, 23, 30, tzinfo=timezone.utc)
        assert local_day(late, timezone.utc) == date(2020, 9, 12)
        assert local_day(late, PLUS_TWO) == date(2020, 9, 13)

    def test_as_local_defaults_to_system_zone(self):
        value = datetime(2020, 9, 12, 8, 20, tzinfo=timezone.utc)
        assert as_local(value) == value

    def test_format_time_and_day(self):
        value = datetime(2020, 9, 12, 8, 20, 5, tzinfo=timezone.utc)
        assert format_time(value, timezone.utc) == "08:20:05"
        assert format_time(value, PLUS_TWO) == "10:20:05"
        assert format_day(date(2020, 9, 12)) == "Sat 12 September 2020"


class TestStorageFormat:
    def test_fixed_width_utc_text(self):
        value = datetime(2020, 9, 12, 10, 20, tzinfo=PLUS_TWO)
        assert to_storage(value) == "2020-09-12T08:20:00.000000+00:00"

    def test_parse_back(self):
        text = "2020-09-12T08:20:00.123000+00:00"
        assert from_storage(text) == datetime(2020, 9, 12, 8, 20, 0, 123000, tzinfo=timezone.utc)

    def test_naive_text_taken_as_utc(self):
        assert from_storage("2020-09-12T08:20:00") == datetime(
            2020, 9, 12, 8, 20, tzinfo=timezone.utc
        )

    def test_text_sorts_chronologically(self):
        nine_utc = datetime(2020, 9, 12, 9, 0, tzinfo=timezone.utc)
        half_past_eight_utc = datetime(2020, 9, 12, 10, 30, tzinfo=PLUS_TWO)
        assert to_storage(half_past_eight_utc) < to_storage(nine_utc)
