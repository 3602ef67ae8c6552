"""
Command-line entry point for checking availability and quoting a booking.

Reads the space configuration, its existing bookings and the requested slots
from JSON files and prints the engine's result as JSON.

Usage:
    python main.py availability --space space.json --bookings bookings.json
    python main.py availability --space space.json --start 2025-07-01 --end 2025-07-07
    python main.py quote --space space.json --bookings bookings.json --slots slots.json --guests 4 --protection
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from booking_engine.errors import BookingEngineError
from booking_engine.logging_context import request_scope
from booking_engine.pricing import (
    calculate_protection_plan_fee,
    compute_pricing,
    is_protection_plan_available,
    with_protection_plan,
)
from booking_engine.scheduling import resolve_availability, validate_slots
from booking_engine.schemas import BookingRecord, DateRange, SpaceConfig, TimeSlot

logger = logging.getLogger(__name__)

_bookings_adapter = TypeAdapter(list[BookingRecord])
_slots_adapter = TypeAdapter(list[TimeSlot])


def _read_json(path: Optional[str], default: Any = None) -> Any:
    if path is None:
        return default
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve availability and price bookings for a venue space."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    availability = subparsers.add_parser("availability", help="List bookable dates and start times.")
    quote = subparsers.add_parser("quote", help="Validate and price requested slots.")

    for sub in (availability, quote):
        sub.add_argument("--space", required=True, help="Path to the space configuration JSON.")
        sub.add_argument("--bookings", default=None, help="Path to the existing bookings JSON list.")
        sub.add_argument("--start", default=None, help="First date to resolve (YYYY-MM-DD).")
        sub.add_argument("--end", default=None, help="Last date to resolve (YYYY-MM-DD).")

    quote.add_argument("--slots", required=True, help="Path to the requested slots JSON list.")
    quote.add_argument("--guests", type=int, default=None, help="Number of guests.")
    quote.add_argument(
        "--protection",
        action="store_true",
        help="Add the protection plan when the space offers it.",
    )
    return parser


def _date_range(args: argparse.Namespace) -> Optional[DateRange]:
    if args.start is None and args.end is None:
        return None
    start = args.start or args.end
    return DateRange(start=start, end=args.end or start)


def _run_availability(args: argparse.Namespace, space: SpaceConfig, bookings: list) -> dict:
    availability = resolve_availability(space, bookings, _date_range(args))
    return availability.model_dump(mode="json")


def _run_quote(args: argparse.Namespace, space: SpaceConfig, bookings: list) -> tuple[dict, bool]:
    slots = _slots_adapter.validate_python(_read_json(args.slots, []))
    date_range = _date_range(args)
    if date_range is None and slots:
        dates = [slot.date for slot in slots]
        date_range = DateRange(start=min(dates), end=max(dates))

    availability = resolve_availability(space, bookings, date_range)
    verdict = validate_slots(slots, availability, args.guests, space)
    if not verdict.valid:
        return verdict.model_dump(mode="json"), False

    protection = args.protection and is_protection_plan_available(space)
    if args.protection and not protection:
        logger.warning("Protection plan is not offered for space %s", space.space_id)
    pricing = compute_pricing(slots, space)
    if protection:
        pricing = with_protection_plan(pricing, calculate_protection_plan_fee(pricing.subtotal))
    return pricing.model_dump(mode="json"), True


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    with request_scope():
        try:
            space = SpaceConfig.model_validate(_read_json(args.space))
            bookings = _bookings_adapter.validate_python(_read_json(args.bookings, []))
            if args.command == "availability":
                output, ok = _run_availability(args, space, bookings), True
            else:
                output, ok = _run_quote(args, space, bookings)
        except (OSError, json.JSONDecodeError, ValidationError, BookingEngineError) as exc:
            logger.error("Could not process request: %s", exc)
            return 1

    sys.stdout.write(json.dumps(output, indent=2) + "\n")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
