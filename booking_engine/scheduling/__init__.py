from booking_engine.scheduling.availability import get_valid_end_times, resolve_availability
from booking_engine.scheduling.conflicts import (
    find_competing_bookings,
    find_conflicting_bookings,
    find_expired_bookings,
    has_time_slot_conflict,
    is_booking_expired,
)
from booking_engine.scheduling.occupancy import calculate_booking_percentage
from booking_engine.scheduling.validator import validate_slots

__all__ = [
    "calculate_booking_percentage",
    "find_competing_bookings",
    "find_conflicting_bookings",
    "find_expired_bookings",
    "get_valid_end_times",
    "has_time_slot_conflict",
    "is_booking_expired",
    "resolve_availability",
    "validate_slots",
]
