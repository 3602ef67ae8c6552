"""Tests for the calendar normalizer."""

import datetime as dt

import pytest
import pytz

from booking_engine.calendar import (
    LocalNow,
    coerce_now,
    iter_dates,
    normalize_time,
    now_local,
    parse_time,
    to_local_date,
    to_minutes,
    weekday_index,
)
from booking_engine.errors import ErrorKind, InvalidDateFormatError


class TestToLocalDate:
    def test_bare_date_string(self):
        assert to_local_date("2025-06-16") == dt.date(2025, 6, 16)

    def test_bare_date_string_with_whitespace(self):
        assert to_local_date(" 2025-06-16 ") == dt.date(2025, 6, 16)

    def test_date_passthrough(self):
        assert to_local_date(dt.date(2025, 6, 16)) == dt.date(2025, 6, 16)

    def test_utc_evening_is_next_day_in_space_timezone(self):
        stamp = pytz.UTC.localize(dt.datetime(2025, 6, 15, 20, 0))
        assert to_local_date(stamp) == dt.date(2025, 6, 16)

    def test_naive_datetime_taken_as_utc(self):
        assert to_local_date(dt.datetime(2025, 6, 15, 20, 0)) == dt.date(2025, 6, 16)

    def test_caller_timezone_does_not_shift_date(self):
        new_york = pytz.timezone("America/New_York")
        stamp = new_york.localize(dt.datetime(2025, 6, 15, 22, 0))
        assert to_local_date(stamp) == dt.date(2025, 6, 16)

    def test_epoch_seconds(self):
        stamp = pytz.UTC.localize(dt.datetime(2025, 6, 15, 20, 0)).timestamp()
        assert to_local_date(stamp) == dt.date(2025, 6, 16)

    @pytest.mark.parametrize(
        "value",
        ["2025/06/16", "16-06-2025", "2025-6-16", "2025-02-30", "", "next tuesday", None, True],
    )
    def test_malformed_values_rejected(self, value):
        with pytest.raises(InvalidDateFormatError) as excinfo:
            to_local_date(value)
        assert excinfo.value.kind == ErrorKind.INVALID_DATE_FORMAT


class TestClockValues:
    def test_to_minutes(self):
        assert to_minutes("09:30") == 570

    def test_to_minutes_accepts_end_of_day(self):
        assert to_minutes("24:00") == 1440

    def test_to_minutes_from_time(self):
        assert to_minutes(dt.time(13, 15)) == 795

    @pytest.mark.parametrize("value", ["24:30", "9:5", "ten am", "12:60", ""])
    def test_malformed_times_rejected(self, value):
        with pytest.raises(InvalidDateFormatError):
            to_minutes(value)

    def test_normalize_time_pads_hour(self):
        assert normalize_time("9:00") == "09:00"

    def test_parse_time(self):
        assert parse_time("13:30") == dt.time(13, 30)

    def test_parse_time_rejects_end_of_day(self):
        with pytest.raises(InvalidDateFormatError):
            parse_time("24:00")


class TestNow:
    def test_now_local_returns_date_and_time(self):
        current = now_local()
        assert isinstance(current, LocalNow)
        assert isinstance(current.date, dt.date)
        assert current.time.microsecond == 0

    def test_coerce_aware_datetime_into_space_timezone(self):
        stamp = pytz.UTC.localize(dt.datetime(2025, 6, 16, 5, 30))
        assert coerce_now(stamp) == LocalNow(dt.date(2025, 6, 16), dt.time(10, 30))

    def test_coerce_keeps_local_now(self):
        pinned = LocalNow(dt.date(2025, 6, 16), dt.time(8, 0))
        assert coerce_now(pinned) is pinned

    def test_seconds_of_day(self):
        assert LocalNow(dt.date(2025, 6, 16), dt.time(1, 2, 3)).seconds_of_day == 3723


class TestWeekdays:
    def test_sunday_is_zero(self):
        assert weekday_index(dt.date(2025, 6, 15)) == 0

    def test_monday_is_one(self):
        assert weekday_index(dt.date(2025, 6, 16)) == 1

    def test_saturday_is_six(self):
        assert weekday_index(dt.date(2025, 6, 21)) == 6

    def test_iter_dates_is_inclusive(self):
        days = list(iter_dates(dt.date(2025, 6, 16), dt.date(2025, 6, 18)))
        assert days == [dt.date(2025, 6, 16), dt.date(2025, 6, 17), dt.date(2025, 6, 18)]
