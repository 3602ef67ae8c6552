"""Booking and requested time slot data models."""

import datetime as dt
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from booking_engine.calendar import normalize_time, to_local_date, to_minutes


class BookingStatus(str, Enum):
    """Lifecycle status of a persisted booking."""

    PENDING = "pending"
    SELECTED = "selected"
    APPROVED = "approved"
    REJECTED = "rejected"


# Rejected bookings free their slots; everything else holds the calendar.
OCCUPYING_STATUSES = frozenset(
    {BookingStatus.PENDING, BookingStatus.SELECTED, BookingStatus.APPROVED}
)


class TimeSlot(BaseModel):
    """A (date, start, end) interval on a space, half-open at the end."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    start_time: str
    end_time: str

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> dt.date:
        return to_local_date(value)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _normalize_time(cls, value: Any) -> str:
        return normalize_time(value)

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end_time)

    def overlaps(self, other: "TimeSlot", padding_minutes: int = 0) -> bool:
        """
        Half-open overlap on the same date, with ``other`` widened by padding.

        ``[a, b)`` and ``[c, d)`` conflict iff ``a < d and c < b``. Padding is
        never carried across midnight into a neighbouring date.
        """
        if self.date != other.date:
            return False
        start = other.start_minutes - padding_minutes
        end = other.end_minutes + padding_minutes
        return self.start_minutes < end and start < self.end_minutes

    def label(self) -> str:
        return f"{self.date.isoformat()} {self.start_time}-{self.end_time}"


class BookingRecord(TimeSlot):
    """An existing booking on a space as supplied by the persistence layer."""

    booking_id: Optional[str] = None
    space_id: Optional[str] = None
    status: BookingStatus = BookingStatus.PENDING

    @property
    def occupies_calendar(self) -> bool:
        return self.status in OCCUPYING_STATUSES

    def as_slot(self) -> TimeSlot:
        return TimeSlot(date=self.date, start_time=self.start_time, end_time=self.end_time)
