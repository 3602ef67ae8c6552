from booking_engine.schemas.availability_schema import (
    AvailabilityResult,
    DateRange,
    ValidationResult,
)
from booking_engine.schemas.booking_schema import (
    OCCUPYING_STATUSES,
    BookingRecord,
    BookingStatus,
    TimeSlot,
)
from booking_engine.schemas.pricing_schema import PricingLine, PricingResult
from booking_engine.schemas.space_schema import SpaceConfig, WorkingHours

__all__ = [
    "AvailabilityResult",
    "BookingRecord",
    "BookingStatus",
    "DateRange",
    "OCCUPYING_STATUSES",
    "PricingLine",
    "PricingResult",
    "SpaceConfig",
    "TimeSlot",
    "ValidationResult",
    "WorkingHours",
]
