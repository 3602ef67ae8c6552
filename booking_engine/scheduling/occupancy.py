"""Per-date occupancy shown on host calendars."""

import datetime as dt
from typing import Iterable

from booking_engine.scheduling.availability import (
    cell_taken,
    occupying_bookings_by_date,
    operating_cells,
)
from booking_engine.schemas.booking_schema import BookingRecord
from booking_engine.schemas.space_schema import SpaceConfig


def calculate_booking_percentage(
    space: SpaceConfig, bookings: Iterable[BookingRecord], day: dt.date
) -> int:
    """
    Share of a date's operating hours that are booked or inside a cooldown.

    Returns a whole percentage in 0..100, or 0 when the date has no
    operating hours. Unlike availability, past hours are not counted as
    taken, so the figure reflects bookings only.
    """
    cells = operating_cells(space, day)
    if not cells:
        return 0
    day_bookings = occupying_bookings_by_date(space, bookings).get(day, [])
    taken = sum(
        1
        for cell in cells
        if any(cell_taken(cell, booking, space.cooldown_minutes) for booking in day_bookings)
    )
    return round(taken * 100 / len(cells))
