"""Space configuration models owned by the host."""

import datetime as dt
import logging
import math
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from booking_engine.calendar import normalize_time, to_local_date, to_minutes, weekday_index
from booking_engine.config import settings
from booking_engine.errors import InvalidDateFormatError

logger = logging.getLogger(__name__)


def _hour_string(value: Any) -> Optional[str]:
    """Accept "9", "09", "9:00" or "09:00"; blank means unset."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if value.isdigit():
            value = f"{int(value):02d}:00"
    return normalize_time(value)


class WorkingHours(BaseModel):
    """Operating window for one weekday. Blank start/end means "use the default"."""

    start: Optional[str] = None
    end: Optional[str] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Optional[str]:
        return _hour_string(value)

    @property
    def is_set(self) -> bool:
        return bool(self.start and self.end)


class SpaceConfig(BaseModel):
    """
    Host-owned configuration of a bookable space.

    Immutable for the duration of an availability or pricing computation.
    Malformed cooldown and blocked-weekday values are defaulted rather than
    rejected so one bad field never blocks the booking flow.
    """

    model_config = ConfigDict(frozen=True)

    space_id: str
    hourly_price: Decimal = Field(default=Decimal("0"), ge=0)
    currency: str = Field(default_factory=lambda: settings.pricing.default_currency)
    max_guests: Optional[int] = Field(default=None, ge=0)
    allow_zero_guests: bool = False
    full_day_hours: int = Field(
        default_factory=lambda: settings.pricing.default_full_day_hours, ge=1, le=24
    )
    full_day_discount_price: Decimal = Field(default=Decimal("0"), ge=0)
    cooldown_minutes: int = 0
    blocked_weekdays: frozenset[int] = frozenset()
    blocked_dates: frozenset[dt.date] = frozenset()
    minimum_hours: int = Field(default=1, ge=1, le=24)
    weekday_time_slots: dict[int, WorkingHours] = Field(default_factory=dict)
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    refund_options: tuple[str, ...] = ()

    @field_validator("hourly_price", "full_day_discount_price", mode="before")
    @classmethod
    def _price_default(cls, value: Any) -> Any:
        return Decimal("0") if value is None else value

    @field_validator("full_day_hours", mode="before")
    @classmethod
    def _full_day_hours_default(cls, value: Any) -> Any:
        return settings.pricing.default_full_day_hours if value is None else value

    @field_validator("minimum_hours", mode="before")
    @classmethod
    def _minimum_hours_default(cls, value: Any) -> Any:
        return 1 if value is None else value

    @field_validator("cooldown_minutes", mode="before")
    @classmethod
    def _cooldown_default(cls, value: Any) -> int:
        if isinstance(value, bool):
            value = None
        try:
            minutes = math.ceil(float(value))
        except (TypeError, ValueError, OverflowError):
            logger.warning("Malformed cooldown %r, defaulting to 0", value)
            return 0
        if minutes < 0:
            logger.warning("Negative cooldown %r, defaulting to 0", value)
            return 0
        return minutes

    @field_validator("blocked_weekdays", mode="before")
    @classmethod
    def _weekdays_default(cls, value: Any) -> frozenset[int]:
        if value is None:
            return frozenset()
        if not isinstance(value, (list, tuple, set, frozenset)):
            logger.warning("Malformed blocked weekdays %r, defaulting to none", value)
            return frozenset()
        weekdays = set()
        for item in value:
            try:
                index = int(item)
            except (TypeError, ValueError):
                index = -1
            if isinstance(item, bool) or not 0 <= index <= 6:
                logger.warning("Malformed blocked weekdays %r, defaulting to none", value)
                return frozenset()
            weekdays.add(index)
        return frozenset(weekdays)

    @field_validator("blocked_dates", mode="before")
    @classmethod
    def _parse_blocked_dates(cls, value: Any) -> frozenset[dt.date]:
        if not value:
            return frozenset()
        if not isinstance(value, (list, tuple, set, frozenset)):
            logger.warning("Malformed blocked dates %r, defaulting to none", value)
            return frozenset()
        dates = set()
        for item in value:
            try:
                dates.add(to_local_date(item))
            except InvalidDateFormatError:
                logger.warning("Skipping malformed blocked date %r", item)
        return frozenset(dates)

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def _normalize_hours(cls, value: Any) -> Optional[str]:
        return _hour_string(value)

    def operating_window(self, day: dt.date) -> tuple[int, int]:
        """Return the (open, close) minutes for a date's weekday."""
        hours = self.weekday_time_slots.get(weekday_index(day))
        if hours is not None and hours.is_set:
            return to_minutes(hours.start), to_minutes(hours.end)
        start = self.check_in or settings.calendar.default_check_in
        end = self.check_out or settings.calendar.default_check_out
        return to_minutes(start), to_minutes(end)

    def is_blocked(self, day: dt.date) -> bool:
        return weekday_index(day) in self.blocked_weekdays or day in self.blocked_dates
