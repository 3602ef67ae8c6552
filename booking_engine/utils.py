"""Shared utilities used across the booking engine."""

from datetime import time
from typing import Union

from booking_engine.calendar import to_minutes


def format_hour_12(value: Union[str, time]) -> str:
    """Format a 24-hour clock value as a 12-hour label on the hour.

    Examples:
        >>> format_hour_12("13:00")
        '1:00 PM'
        >>> format_hour_12("00:00")
        '12:00 AM'
    """
    hour = to_minutes(value) // 60
    display_hour = 12 if hour % 12 == 0 else hour % 12
    am_pm = "AM" if hour < 12 or hour == 24 else "PM"
    return f"{display_hour}:00 {am_pm}"


def format_hour_24(hour: int) -> str:
    """Format an hour index as ``HH:00``.

    Examples:
        >>> format_hour_24(9)
        '09:00'
    """
    return f"{hour:02d}:00"


def pluralize(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural
