"""Shared test fixtures and helpers."""

import datetime as dt
from decimal import Decimal
from typing import Optional

import pytest

from booking_engine.calendar import LocalNow
from booking_engine.scheduling.availability import resolve_availability
from booking_engine.schemas import (
    AvailabilityResult,
    BookingRecord,
    BookingStatus,
    DateRange,
    SpaceConfig,
    TimeSlot,
)

# 2025-06-16 is a Monday (weekday index 1).
TODAY = dt.date(2025, 6, 16)
TOMORROW = dt.date(2025, 6, 17)
NOW = LocalNow(TODAY, dt.time(10, 30))


def make_space(**overrides) -> SpaceConfig:
    """Helper to create a SpaceConfig with sensible defaults (09:00-17:00)."""
    values = {
        "space_id": "space-1",
        "hourly_price": Decimal("100"),
        "full_day_hours": 8,
        "full_day_discount_price": Decimal("500"),
        "cooldown_minutes": 0,
        "max_guests": 10,
    }
    values.update(overrides)
    return SpaceConfig(**values)


def make_booking(
    date: dt.date = TOMORROW,
    start: str = "10:00",
    end: str = "12:00",
    status: BookingStatus = BookingStatus.APPROVED,
    booking_id: Optional[str] = None,
    space_id: Optional[str] = None,
) -> BookingRecord:
    return BookingRecord(
        date=date,
        start_time=start,
        end_time=end,
        status=status,
        booking_id=booking_id,
        space_id=space_id,
    )


def make_slot(date: dt.date = TOMORROW, start: str = "09:00", end: str = "11:00") -> TimeSlot:
    return TimeSlot(date=date, start_time=start, end_time=end)


def resolve(
    space: SpaceConfig,
    bookings: Optional[list[BookingRecord]] = None,
    start: dt.date = TODAY,
    end: dt.date = TOMORROW,
    now: LocalNow = NOW,
) -> AvailabilityResult:
    """Resolve availability with a pinned clock."""
    return resolve_availability(space, bookings or [], DateRange(start=start, end=end), now=now)


@pytest.fixture
def space():
    return make_space()


@pytest.fixture
def availability(space):
    return resolve(space)
