"""
Calendar normalizer: the single place where dates and clock times are parsed.

Every space is evaluated in one fixed timezone (Asia/Tashkent by default,
which has no daylight-saving transitions). Callers in other zones pass bare
``YYYY-MM-DD`` strings or timestamps and always get back the calendar date
as seen in the space timezone, never in their own.
"""

import logging
import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterator, NamedTuple, Optional, Union

import pytz

from booking_engine.config import settings
from booking_engine.errors import InvalidDateFormatError

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")

MINUTES_PER_DAY = 24 * 60

DateInput = Union[str, date, datetime, int, float]
TimeInput = Union[str, time]


class LocalNow(NamedTuple):
    """The current calendar date and wall-clock time in the space timezone."""

    date: date
    time: time

    @property
    def seconds_of_day(self) -> int:
        return self.time.hour * 3600 + self.time.minute * 60 + self.time.second


def get_timezone(name: Optional[str] = None) -> tzinfo:
    """Return the fixed space timezone (or an explicitly named one)."""
    return pytz.timezone(name or settings.calendar.timezone)


def to_local_date(value: DateInput, tz: Optional[str] = None) -> date:
    """
    Normalize a date input to a calendar date in the space timezone.

    A bare ``YYYY-MM-DD`` string is read as year/month/day fields with no
    time-of-day component. A timestamp (aware or naive ``datetime``, or epoch
    seconds) is converted to the space timezone and truncated to its date;
    naive datetimes are taken as UTC.
    """
    if isinstance(value, bool):
        raise InvalidDateFormatError(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = pytz.UTC.localize(value)
        return value.astimezone(get_timezone(tz)).date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        try:
            instant = datetime.fromtimestamp(value, tz=pytz.UTC)
        except (OverflowError, OSError, ValueError):
            raise InvalidDateFormatError(value) from None
        return instant.astimezone(get_timezone(tz)).date()
    if isinstance(value, str):
        match = DATE_PATTERN.match(value.strip())
        if match:
            year, month, day = (int(part) for part in match.groups())
            try:
                return date(year, month, day)
            except ValueError:
                pass
    raise InvalidDateFormatError(value)


def to_minutes(value: TimeInput) -> int:
    """
    Convert an ``HH:MM`` clock value to minutes since local midnight.

    ``24:00`` is accepted as the end of the day so operating hours and
    bookings can run up to midnight.
    """
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if isinstance(value, str):
        match = TIME_PATTERN.match(value.strip())
        if match:
            hours, minutes = int(match.group(1)), int(match.group(2))
            total = hours * 60 + minutes
            if minutes < 60 and total <= MINUTES_PER_DAY:
                return total
    raise InvalidDateFormatError(value)


def parse_time(value: TimeInput) -> time:
    """Parse an ``HH:MM`` clock value; ``24:00`` has no ``time`` form and is rejected."""
    minutes = to_minutes(value)
    if minutes >= MINUTES_PER_DAY:
        raise InvalidDateFormatError(value)
    return time(minutes // 60, minutes % 60)


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time(value: TimeInput) -> str:
    """Return a clock value in canonical zero-padded ``HH:MM`` form."""
    return format_minutes(to_minutes(value))


def now_local(tz: Optional[str] = None) -> LocalNow:
    """Read the wall clock once, as a (date, time) pair in the space timezone."""
    current = datetime.now(get_timezone(tz))
    return LocalNow(current.date(), current.time().replace(microsecond=0))


def coerce_now(now: Union[LocalNow, datetime, None], tz: Optional[str] = None) -> LocalNow:
    """Accept an explicit "now" from the caller, or read the clock."""
    if now is None:
        return now_local(tz)
    if isinstance(now, LocalNow):
        return now
    if now.tzinfo is None:
        now = pytz.UTC.localize(now)
    local = now.astimezone(get_timezone(tz))
    return LocalNow(local.date(), local.time().replace(microsecond=0))


def weekday_index(day: date) -> int:
    """Weekday index with Sunday = 0 through Saturday = 6."""
    return (day.weekday() + 1) % 7


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from start to end, inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
