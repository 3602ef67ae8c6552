"""
Pricing engine: turns validated slots into a price breakdown.

Each slot is priced on its own. A slot that reaches the space's full-day
threshold, while a full-day discount price is configured, is charged per
full day plus the leftover hours at the hourly rate; shorter slots are
charged hourly. The protection plan fee is added once to the subtotal.
Amounts are Decimals and are never rounded here.
"""

import logging
from decimal import Decimal
from typing import Iterable, Union

from booking_engine.errors import InvalidRangeError
from booking_engine.schemas.booking_schema import TimeSlot
from booking_engine.schemas.pricing_schema import PricingLine, PricingResult
from booking_engine.schemas.space_schema import SpaceConfig
from booking_engine.utils import format_hour_12, pluralize

logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, str]


def slot_hours(slot: TimeSlot) -> int:
    """Whole hours between the start and end hour of a slot."""
    return slot.end_minutes // 60 - slot.start_minutes // 60


def price_slot(slot: TimeSlot, space: SpaceConfig) -> PricingLine:
    """Price one slot, choosing the full-day tier when it applies."""
    hours = slot_hours(slot)
    if hours <= 0:
        raise InvalidRangeError(f"Slot {slot.label()} covers {hours} hour(s).")

    full_day_price = space.full_day_discount_price
    if hours >= space.full_day_hours and full_day_price > 0:
        full_days, remaining = divmod(hours, space.full_day_hours)
        price = full_days * full_day_price + remaining * space.hourly_price
        price_type = f"{full_days} {pluralize(full_days, 'full day', 'full days')}"
        if remaining:
            price_type += f" + {remaining}h"
    else:
        price = hours * space.hourly_price
        price_type = f"{hours}h"

    logger.debug("Priced %s at %s (%s)", slot.label(), price, price_type)
    return PricingLine(
        date=slot.date,
        time_range=f"{format_hour_12(slot.start_time)} - {format_hour_12(slot.end_time)}",
        hours=hours,
        price=price,
        price_type=price_type,
    )


def compute_pricing(
    validated_slots: Iterable[TimeSlot],
    space: SpaceConfig,
    protection_plan_selected: bool = False,
    protection_plan_fee: Amount = Decimal("0"),
) -> PricingResult:
    """
    Build the price breakdown for a validated booking request.

    Lines keep the input order. ``protection_plan_fee`` is the amount the
    caller looked up from its policy; it only counts when selected.

    Raises:
        InvalidRangeError: a slot has zero or negative hours.
    """
    lines = [price_slot(slot, space) for slot in validated_slots]
    subtotal = sum((line.price for line in lines), Decimal("0"))
    fee = Decimal(str(protection_plan_fee)) if protection_plan_selected else Decimal("0")
    result = PricingResult(
        lines=lines,
        total_hours=sum(line.hours for line in lines),
        subtotal=subtotal,
        protection_plan_fee=fee,
        final_total=subtotal + fee,
    )
    logger.info(
        "Priced %d slot(s) for space %s: subtotal=%s fee=%s total=%s %s",
        len(lines),
        space.space_id,
        result.subtotal,
        result.protection_plan_fee,
        result.final_total,
        space.currency,
    )
    return result


def with_protection_plan(result: PricingResult, fee: Amount) -> PricingResult:
    """Return ``result`` with the protection plan fee added once to the subtotal."""
    fee = Decimal(str(fee))
    logger.info("Protection plan fee %s added to subtotal %s", fee, result.subtotal)
    return result.model_copy(
        update={"protection_plan_fee": fee, "final_total": result.subtotal + fee}
    )
