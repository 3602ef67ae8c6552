"""Tests for shared utility functions and the request logging context."""

import datetime as dt
import io
import logging

import pytest

from booking_engine.errors import InvalidDateFormatError
from booking_engine.logging_context import (
    NO_REQUEST_ID,
    RequestIdFilter,
    get_request_id,
    request_id_handler,
    request_scope,
)
from booking_engine.utils import format_hour_12, format_hour_24, pluralize


class TestFormatHour12:
    def test_morning(self):
        assert format_hour_12("09:00") == "9:00 AM"

    def test_noon(self):
        assert format_hour_12("12:00") == "12:00 PM"

    def test_afternoon(self):
        assert format_hour_12("17:00") == "5:00 PM"

    def test_midnight(self):
        assert format_hour_12("00:00") == "12:00 AM"

    def test_end_of_day(self):
        assert format_hour_12("24:00") == "12:00 AM"

    def test_time_object(self):
        assert format_hour_12(dt.time(13, 0)) == "1:00 PM"

    def test_malformed_value_rejected(self):
        with pytest.raises(InvalidDateFormatError):
            format_hour_12("noon")


class TestFormatHour24:
    def test_pads_single_digit(self):
        assert format_hour_24(9) == "09:00"

    def test_two_digits(self):
        assert format_hour_24(16) == "16:00"


class TestPluralize:
    def test_singular(self):
        assert pluralize(1, "full day", "full days") == "full day"

    def test_plural(self):
        assert pluralize(3, "full day", "full days") == "full days"


class TestRequestLogging:
    def test_scope_binds_and_restores_request_id(self):
        with request_scope("REQ-test01") as request_id:
            assert request_id == "REQ-test01"
            assert get_request_id() == "REQ-test01"
        assert get_request_id() == NO_REQUEST_ID

    def test_scope_generates_request_id(self):
        with request_scope() as request_id:
            assert request_id.startswith("REQ-")
            assert len(request_id) == len("REQ-") + 8

    def test_filter_injects_request_id(self):
        record = logging.LogRecord("booking", logging.INFO, __file__, 1, "msg", None, None)
        with request_scope("REQ-test02"):
            assert RequestIdFilter().filter(record) is True
        assert record.request_id == "REQ-test02"

    def test_log_lines_carry_request_id(self):
        stream = io.StringIO()
        logger = logging.getLogger("booking_engine.tests.request_lines")
        logger.setLevel(logging.INFO)
        logger.propagate = False
        handler = request_id_handler(stream)
        logger.addHandler(handler)
        try:
            with request_scope("REQ-test03"):
                logger.info("Resolved availability")
            logger.info("Outside any request")
        finally:
            logger.removeHandler(handler)
        first, second = stream.getvalue().splitlines()
        assert "[REQ-test03]" in first and first.endswith("INFO: Resolved availability")
        assert f"[{NO_REQUEST_ID}]" in second
