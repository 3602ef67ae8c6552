from booking_engine.pricing.calculator import compute_pricing, price_slot, with_protection_plan
from booking_engine.pricing.protection import (
    calculate_protection_plan_fee,
    is_protection_plan_available,
)

__all__ = [
    "compute_pricing",
    "price_slot",
    "with_protection_plan",
    "calculate_protection_plan_fee",
    "is_protection_plan_available",
]
