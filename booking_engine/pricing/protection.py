"""
Protection plan policy.

The plan is an optional add-on a client can buy when the host has enabled it
among the space's refund options. Its fee is a percentage of the booking
subtotal. The pricing engine never calls this module; the caller looks the
fee up here and passes it in.
"""

import logging
from decimal import Decimal
from typing import Optional, Union

from booking_engine.config import settings
from booking_engine.schemas.space_schema import SpaceConfig

logger = logging.getLogger(__name__)

PROTECTION_PLAN_OPTION = "client_protection_plan"
NON_REFUNDABLE_OPTION = "non_refundable"


def is_protection_plan_available(space: SpaceConfig) -> bool:
    """The plan is offered when enabled and the space is not non-refundable."""
    options = set(space.refund_options)
    return PROTECTION_PLAN_OPTION in options and NON_REFUNDABLE_OPTION not in options


def get_protection_plan_percentage() -> float:
    return settings.pricing.protection_plan_percentage


def calculate_protection_plan_fee(
    subtotal: Union[Decimal, int, str], percentage: Optional[float] = None
) -> Decimal:
    """Fee for a subtotal at the configured (or given) percentage, unrounded."""
    rate = get_protection_plan_percentage() if percentage is None else percentage
    fee = Decimal(str(subtotal)) * Decimal(str(rate)) / Decimal("100")
    logger.debug("Protection plan fee for %s at %s%%: %s", subtotal, rate, fee)
    return fee
