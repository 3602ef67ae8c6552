"""
Conflict helpers used around the host approval workflow.

Pending and selected requests are allowed to compete for the same hours.
When the host approves one, the others that collide with it (including the
cooldown) are returned so the caller can reject them; expired requests are
returned so the caller can clean them up.
"""

import datetime as dt
import logging
from typing import Iterable, Optional, Union

from booking_engine.calendar import LocalNow, coerce_now
from booking_engine.schemas.booking_schema import BookingRecord, BookingStatus, TimeSlot

logger = logging.getLogger(__name__)

COMPETING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.SELECTED})


def has_time_slot_conflict(first: TimeSlot, second: TimeSlot, cooldown_minutes: int = 0) -> bool:
    """True when two slots share a date and collide once cooldown is applied."""
    return first.overlaps(second, padding_minutes=cooldown_minutes)


def find_conflicting_bookings(
    approved: Iterable[TimeSlot],
    candidates: Iterable[BookingRecord],
    cooldown_minutes: int = 0,
) -> list[BookingRecord]:
    """Competing requests that can no longer be honoured once ``approved`` is accepted."""
    approved_slots = list(approved)
    conflicting = []
    for booking in candidates:
        if booking.status not in COMPETING_STATUSES:
            continue
        if any(has_time_slot_conflict(booking, slot, cooldown_minutes) for slot in approved_slots):
            conflicting.append(booking)
    logger.info("Found %d booking(s) conflicting with approval", len(conflicting))
    return conflicting


def find_competing_bookings(
    slots: Iterable[TimeSlot],
    bookings: Iterable[BookingRecord],
    exclude_booking_id: Optional[str] = None,
) -> list[BookingRecord]:
    """Pending or selected bookings asking for the same hours, cooldown ignored."""
    targets = list(slots)
    return [
        booking
        for booking in bookings
        if booking.status in COMPETING_STATUSES
        and (exclude_booking_id is None or booking.booking_id != exclude_booking_id)
        and any(has_time_slot_conflict(target, booking) for target in targets)
    ]


def is_booking_expired(
    booking: BookingRecord, now: Union[LocalNow, dt.datetime, None] = None
) -> bool:
    """A pending or selected booking whose slot has already ended in the space timezone."""
    if booking.status not in COMPETING_STATUSES:
        return False
    current = coerce_now(now)
    if booking.date < current.date:
        return True
    if booking.date == current.date:
        return booking.end_minutes * 60 <= current.seconds_of_day
    return False


def find_expired_bookings(
    bookings: Iterable[BookingRecord], now: Union[LocalNow, dt.datetime, None] = None
) -> list[BookingRecord]:
    current = coerce_now(now)
    expired = [booking for booking in bookings if is_booking_expired(booking, current)]
    if expired:
        logger.info("%d expired booking request(s) found", len(expired))
    return expired
