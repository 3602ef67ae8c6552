"""
Availability resolver: which dates and hourly start times a space can still sell.

A date is bookable when it is not blocked (weekday or calendar date), not in
the past, and still has at least one free run of ``minimum_hours`` hourly
cells inside its operating hours. A cell is taken when it overlaps an
occupying booking widened by the cooldown on both sides, or, for today, when
it does not start strictly after "now". Cooldown is evaluated per calendar
date and never carries past midnight.
"""

import datetime as dt
import logging
from collections import defaultdict
from typing import Iterable, Optional, Union

from booking_engine.calendar import LocalNow, coerce_now, format_minutes, iter_dates, to_minutes
from booking_engine.config import settings
from booking_engine.schemas.availability_schema import AvailabilityResult, DateRange
from booking_engine.schemas.booking_schema import BookingRecord
from booking_engine.schemas.space_schema import SpaceConfig
from booking_engine.utils import format_hour_24

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60


def occupying_bookings_by_date(
    space: SpaceConfig, bookings: Iterable[BookingRecord]
) -> dict[dt.date, list[BookingRecord]]:
    """Group the bookings that hold the calendar of this space by date."""
    grouped: dict[dt.date, list[BookingRecord]] = defaultdict(list)
    for booking in bookings:
        if not booking.occupies_calendar:
            continue
        if booking.space_id is not None and booking.space_id != space.space_id:
            continue
        grouped[booking.date].append(booking)
    return grouped


def operating_cells(space: SpaceConfig, day: dt.date) -> list[int]:
    """Start minute of every whole-hour cell that fits inside operating hours."""
    open_minutes, close_minutes = space.operating_window(day)
    first_hour = -(-open_minutes // MINUTES_PER_HOUR)
    cells = []
    hour = first_hour
    while (hour + 1) * MINUTES_PER_HOUR <= close_minutes:
        cells.append(hour * MINUTES_PER_HOUR)
        hour += 1
    return cells


def cell_taken(cell: int, booking: BookingRecord, cooldown_minutes: int) -> bool:
    blocked_start = booking.start_minutes - cooldown_minutes
    blocked_end = booking.end_minutes + cooldown_minutes
    return cell < blocked_end and blocked_start < cell + MINUTES_PER_HOUR


def free_cells(
    space: SpaceConfig,
    day: dt.date,
    day_bookings: list[BookingRecord],
    now: LocalNow,
) -> list[int]:
    """Cells on ``day`` that are neither past, booked, nor inside a cooldown."""
    cells = []
    for cell in operating_cells(space, day):
        if day == now.date and cell * 60 <= now.seconds_of_day:
            continue
        if any(cell_taken(cell, booking, space.cooldown_minutes) for booking in day_bookings):
            continue
        cells.append(cell)
    return cells


def bookable_starts(space: SpaceConfig, cells: list[int]) -> list[int]:
    """Cells that begin a free run of at least ``minimum_hours`` cells."""
    free = set(cells)
    return [
        cell
        for cell in cells
        if all(cell + i * MINUTES_PER_HOUR in free for i in range(space.minimum_hours))
    ]


def resolve_availability(
    space: SpaceConfig,
    existing_bookings: Iterable[BookingRecord],
    date_range: Optional[DateRange] = None,
    now: Union[LocalNow, dt.datetime, None] = None,
) -> AvailabilityResult:
    """
    Compute the bookable dates and hourly start times of a space.

    When no range is given, availability covers today through the configured
    window. ``now`` may be pinned by the caller; otherwise the clock is read
    once through the calendar normalizer.
    """
    current = coerce_now(now)
    if date_range is None:
        date_range = DateRange(
            start=current.date,
            end=current.date + dt.timedelta(days=settings.availability.window_days),
        )

    by_date = occupying_bookings_by_date(space, existing_bookings)
    result = AvailabilityResult()

    for day in iter_dates(max(date_range.start, current.date), date_range.end):
        if space.is_blocked(day):
            logger.debug("Space %s blocked on %s", space.space_id, day)
            continue
        cells = free_cells(space, day, by_date.get(day, []), current)
        starts = bookable_starts(space, cells)
        if not starts:
            continue
        result.bookable_dates.append(day)
        result.slots_by_date[day] = [format_hour_24(c // MINUTES_PER_HOUR) for c in starts]
        result.free_hours_by_date[day] = [format_hour_24(c // MINUTES_PER_HOUR) for c in cells]
        result.closing_by_date[day] = format_minutes(space.operating_window(day)[1])

    logger.info(
        "Resolved availability for space %s: %d bookable date(s) between %s and %s",
        space.space_id,
        len(result.bookable_dates),
        date_range.start,
        date_range.end,
    )
    return result


def get_valid_end_times(
    availability: AvailabilityResult,
    space: SpaceConfig,
    day: dt.date,
    start_time: str,
) -> list[str]:
    """
    End times reachable from a bookable start without crossing a taken cell.

    Every option is at least ``minimum_hours`` after the start.
    """
    if not availability.is_bookable_start(day, start_time):
        return []
    free = set(availability.free_hours_by_date.get(day, []))
    start_hour = to_minutes(start_time) // MINUTES_PER_HOUR
    options = []
    hour = start_hour
    while format_hour_24(hour) in free:
        hour += 1
        if hour - start_hour >= space.minimum_hours:
            options.append(format_hour_24(hour))
    return options
