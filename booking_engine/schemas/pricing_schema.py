"""Pricing breakdown models."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class PricingLine(BaseModel):
    """Price of one requested slot."""
    date: dt.date
    time_range: str
    hours: int
    price: Decimal
    price_type: str


class PricingResult(BaseModel):
    """Priced booking request. Amounts are unrounded; display formats them."""
    lines: list[PricingLine] = Field(default_factory=list)
    total_hours: int = 0
    subtotal: Decimal = Decimal("0")
    protection_plan_fee: Decimal = Decimal("0")
    final_total: Decimal = Decimal("0")
