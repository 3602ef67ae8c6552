"""End-to-end tests for the command-line entry point."""

import io
import json
import logging
from decimal import Decimal

import pytest

from booking_engine.logging_context import request_id_handler
from main import main

# Far enough ahead that the real clock never makes it "today" or the past.
FUTURE_DATE = "2030-01-08"


def _write(path, payload) -> str:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


@pytest.fixture
def files(tmp_path):
    space = {
        "space_id": "hall-7",
        "hourly_price": "100",
        "full_day_hours": 8,
        "full_day_discount_price": "500",
        "cooldown_minutes": 60,
        "max_guests": 20,
        "refund_options": ["client_protection_plan"],
    }
    bookings = [
        {"date": FUTURE_DATE, "start_time": "13:00", "end_time": "14:00", "status": "approved"},
        {"date": FUTURE_DATE, "start_time": "09:00", "end_time": "17:00", "status": "rejected"},
    ]
    return {
        "space": _write(tmp_path / "space.json", space),
        "bookings": _write(tmp_path / "bookings.json", bookings),
        "tmp_path": tmp_path,
    }


class TestAvailabilityCommand:
    def test_prints_available_slots(self, files, capsys):
        code = main([
            "availability", "--space", files["space"], "--bookings", files["bookings"],
            "--start", FUTURE_DATE, "--end", FUTURE_DATE,
        ])
        output = json.loads(capsys.readouterr().out)
        assert code == 0
        assert output["bookable_dates"] == [FUTURE_DATE]
        assert output["slots_by_date"][FUTURE_DATE] == ["09:00", "10:00", "11:00", "15:00", "16:00"]

    def test_unreadable_space_file(self, files):
        missing = str(files["tmp_path"] / "missing.json")
        assert main(["availability", "--space", missing]) == 1


class TestQuoteCommand:
    def test_quote_with_protection_plan(self, files, capsys):
        slots = [{"date": FUTURE_DATE, "start_time": "09:00", "end_time": "11:00"}]
        slots_path = _write(files["tmp_path"] / "slots.json", slots)
        code = main([
            "quote", "--space", files["space"], "--bookings", files["bookings"],
            "--slots", slots_path, "--guests", "5", "--protection",
        ])
        output = json.loads(capsys.readouterr().out)
        assert code == 0
        assert Decimal(output["subtotal"]) == Decimal("200")
        assert Decimal(output["final_total"]) == Decimal(output["subtotal"]) + Decimal(
            output["protection_plan_fee"]
        )
        assert output["lines"][0]["price_type"] == "2h"

    def test_quote_rejects_self_overlap(self, files, capsys):
        slots = [
            {"date": FUTURE_DATE, "start_time": "09:00", "end_time": "11:00"},
            {"date": FUTURE_DATE, "start_time": "10:00", "end_time": "12:00"},
        ]
        slots_path = _write(files["tmp_path"] / "slots.json", slots)
        code = main([
            "quote", "--space", files["space"], "--bookings", files["bookings"],
            "--slots", slots_path, "--guests", "5",
        ])
        output = json.loads(capsys.readouterr().out)
        assert code == 1
        assert output["valid"] is False
        assert output["reason"] == "SelfOverlap"

    def test_quote_logs_carry_one_request_id(self, files, capsys):
        slots = [{"date": FUTURE_DATE, "start_time": "09:00", "end_time": "11:00"}]
        slots_path = _write(files["tmp_path"] / "slots.json", slots)
        stream = io.StringIO()
        handler = request_id_handler(stream)
        root = logging.getLogger()
        previous_level = root.level
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        try:
            code = main([
                "quote", "--space", files["space"], "--bookings", files["bookings"],
                "--slots", slots_path, "--guests", "5", "--protection",
            ])
        finally:
            root.removeHandler(handler)
            root.setLevel(previous_level)
        capsys.readouterr()

        lines = stream.getvalue().splitlines()
        request_ids = {line.split("[")[1].split("]")[0] for line in lines}
        assert code == 0
        assert len(request_ids) == 1
        assert request_ids.pop().startswith("REQ-")
        assert sum("Priced 1 slot(s)" in line for line in lines) == 1
