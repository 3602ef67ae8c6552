"""Availability and pricing engine for hourly venue bookings."""

from booking_engine.errors import BookingEngineError, ErrorKind
from booking_engine.pricing import compute_pricing
from booking_engine.scheduling import resolve_availability, validate_slots

__all__ = [
    "BookingEngineError",
    "ErrorKind",
    "compute_pricing",
    "resolve_availability",
    "validate_slots",
]
