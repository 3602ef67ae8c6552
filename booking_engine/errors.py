"""Typed error kinds shared by the scheduling and pricing modules."""

from enum import Enum


class ErrorKind(str, Enum):
    """Reason a booking request or computation was refused."""

    INVALID_DATE_FORMAT = "InvalidDateFormat"
    SLOT_UNAVAILABLE = "SlotUnavailable"
    INVALID_RANGE = "InvalidRange"
    SELF_OVERLAP = "SelfOverlap"
    GUEST_COUNT_OUT_OF_RANGE = "GuestCountOutOfRange"


class BookingEngineError(Exception):
    """Base error carrying the ErrorKind the caller renders a message for."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class InvalidDateFormatError(BookingEngineError):
    def __init__(self, value: object) -> None:
        super().__init__(
            ErrorKind.INVALID_DATE_FORMAT,
            f"Invalid date or time value: {value!r}",
        )
        self.value = value


class InvalidRangeError(BookingEngineError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.INVALID_RANGE, message)
