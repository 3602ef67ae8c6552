"""Request-scoped log correlation.

Every log line written while a booking request is processed carries that
request's id, so one submission can be followed through availability,
validation and pricing. The id is stamped by a handler filter, which means
plain ``logging.getLogger(__name__)`` loggers pick it up without any setup
of their own.

Usage:
    from booking_engine.logging_context import request_scope

    with request_scope() as request_id:
        resolve_availability(space, bookings)
        # 2025-06-16 10:30:00 [REQ-1a2b3c4d] [booking_engine...] INFO: ...
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import IO, Iterator, Optional

NO_REQUEST_ID = "-"
LOG_FORMAT = "%(asctime)s [%(request_id)s] [%(name)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


def new_request_id() -> str:
    return f"REQ-{uuid.uuid4().hex[:8]}"


def get_request_id() -> str:
    return _request_id.get()


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind a request id for the duration of the block, then restore the previous one."""
    token = _request_id.set(request_id or new_request_id())
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Copies the current request id onto each record as ``request_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()  # type: ignore[attr-defined]
        return True


def request_id_handler(stream: Optional[IO[str]] = None) -> logging.Handler:
    """A stream handler whose lines are prefixed with the request id."""
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(
        logging.Formatter(LOG_FORMAT, DATE_FORMAT, defaults={"request_id": NO_REQUEST_ID})
    )
    return handler


def configure_logging(level: int = logging.INFO) -> None:
    """Install the request-id handler on the root logger unless one is already configured."""
    logging.basicConfig(level=level, handlers=[request_id_handler()])
