"""
Slot conflict validator for a single booking submission.

Runs its checks in a fixed order and stops at the first failure:

1. every requested start is in the resolved availability  -> SlotUnavailable
2. every range is a whole number of hours >= 1, covers only
   free cells and meets the space minimum                  -> InvalidRange / SlotUnavailable
3. no two requested slots overlap each other               -> SelfOverlap
4. the guest count fits the space                          -> GuestCountOutOfRange

The verdict is advisory. Two clients can both see a slot as free before
either booking is written, so the persistence layer must repeat the overlap
check atomically at insert time.
"""

import logging
from itertools import combinations
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from booking_engine.calendar import format_minutes
from booking_engine.errors import ErrorKind, InvalidDateFormatError
from booking_engine.schemas.availability_schema import AvailabilityResult, ValidationResult
from booking_engine.schemas.booking_schema import TimeSlot
from booking_engine.schemas.space_schema import SpaceConfig

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60


def _reject(
    reason: ErrorKind, message: str, slot: Optional[TimeSlot] = None
) -> ValidationResult:
    logger.info("Booking request rejected (%s): %s", reason.value, message)
    return ValidationResult(valid=False, reason=reason, conflicting_slot=slot, message=message)


def _coerce_slots(
    requested_slots: Iterable[Union[TimeSlot, dict[str, Any]]],
) -> list[TimeSlot]:
    slots = []
    for raw in requested_slots:
        if isinstance(raw, TimeSlot):
            slots.append(raw)
        else:
            try:
                slots.append(TimeSlot.model_validate(raw))
            except ValidationError:
                raise InvalidDateFormatError(raw) from None
    return slots


def _check_range(slot: TimeSlot, space: SpaceConfig) -> Optional[str]:
    duration = slot.end_minutes - slot.start_minutes
    if duration <= 0:
        return f"Start {slot.start_time} must be before end {slot.end_time} on {slot.date}."
    if duration % MINUTES_PER_HOUR:
        return f"Slot {slot.label()} is not a whole number of hours."
    if duration // MINUTES_PER_HOUR < space.minimum_hours:
        return (
            f"Slot {slot.label()} is shorter than the minimum of "
            f"{space.minimum_hours} hour(s)."
        )
    return None


def _uncovered_hour(slot: TimeSlot, availability: AvailabilityResult) -> Optional[str]:
    for minutes in range(slot.start_minutes, slot.end_minutes, MINUTES_PER_HOUR):
        hour_time = format_minutes(minutes)
        if not availability.is_free_hour(slot.date, hour_time):
            return hour_time
    return None


def _guest_count_error(guest_count: Optional[int], space: SpaceConfig) -> Optional[str]:
    if space.max_guests is None:
        return None
    minimum = 0 if space.allow_zero_guests else 1
    if guest_count is None or not minimum <= guest_count <= space.max_guests:
        return (
            f"Guest count {guest_count} is outside the allowed range "
            f"{minimum}-{space.max_guests}."
        )
    return None


def validate_slots(
    requested_slots: Iterable[Union[TimeSlot, dict[str, Any]]],
    availability: AvailabilityResult,
    guest_count: Optional[int],
    space: SpaceConfig,
) -> ValidationResult:
    """
    Validate every slot of one booking submission against a resolved snapshot.

    Never raises for bad input: malformed dates and times come back as an
    ``InvalidDateFormat`` rejection like every other failure.
    """
    try:
        slots = _coerce_slots(requested_slots)
    except InvalidDateFormatError as exc:
        return _reject(ErrorKind.INVALID_DATE_FORMAT, exc.message)

    if not slots:
        return _reject(ErrorKind.INVALID_RANGE, "No time slots were selected.")

    for slot in slots:
        if not availability.is_bookable_start(slot.date, slot.start_time):
            return _reject(
                ErrorKind.SLOT_UNAVAILABLE,
                f"{slot.start_time} on {slot.date} is not available.",
                slot,
            )

    for slot in slots:
        problem = _check_range(slot, space)
        if problem:
            return _reject(ErrorKind.INVALID_RANGE, problem, slot)

    for slot in slots:
        taken = _uncovered_hour(slot, availability)
        if taken:
            return _reject(
                ErrorKind.SLOT_UNAVAILABLE,
                f"Slot {slot.label()} runs into {taken}, which is not available.",
                slot,
            )

    for first, second in combinations(slots, 2):
        if first.overlaps(second):
            return _reject(
                ErrorKind.SELF_OVERLAP,
                f"Slots {first.label()} and {second.label()} overlap.",
                second,
            )

    problem = _guest_count_error(guest_count, space)
    if problem:
        return _reject(ErrorKind.GUEST_COUNT_OUT_OF_RANGE, problem)

    logger.info("Booking request for space %s accepted: %d slot(s)", space.space_id, len(slots))
    return ValidationResult(valid=True)
