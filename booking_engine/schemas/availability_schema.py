"""Availability and validation result models."""

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from booking_engine.calendar import to_local_date
from booking_engine.errors import ErrorKind
from booking_engine.schemas.booking_schema import TimeSlot


class DateRange(BaseModel):
    """Inclusive range of calendar dates to resolve availability for."""
    start: dt.date
    end: dt.date

    @field_validator("start", "end", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> dt.date:
        return to_local_date(value)


class AvailabilityResult(BaseModel):
    """Bookable dates and, per date, the bookable hourly start times."""
    bookable_dates: list[dt.date] = Field(default_factory=list)
    slots_by_date: dict[dt.date, list[str]] = Field(default_factory=dict)
    free_hours_by_date: dict[dt.date, list[str]] = Field(default_factory=dict)
    closing_by_date: dict[dt.date, str] = Field(default_factory=dict)

    def is_bookable_start(self, date: dt.date, start_time: str) -> bool:
        return start_time in self.slots_by_date.get(date, [])

    def is_free_hour(self, date: dt.date, hour_time: str) -> bool:
        return hour_time in self.free_hours_by_date.get(date, [])


class ValidationResult(BaseModel):
    """Verdict on a booking submission."""
    valid: bool
    reason: Optional[ErrorKind] = None
    conflicting_slot: Optional[TimeSlot] = None
    message: str = ""
