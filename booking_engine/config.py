"""
Centralized configuration with environment variable overrides.

The space timezone, fallback operating hours, availability window and
pricing defaults are configurable here. Nothing is hardcoded in the
scheduling or pricing logic.
"""

import logging
import os
from dataclasses import dataclass, field

import pytz
from dotenv import load_dotenv

from booking_engine.logging_context import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class CalendarConfig:
    """Timezone and fallback operating hours shared by every space."""

    timezone: str = os.getenv("BOOKING_TIMEZONE", "Asia/Tashkent")
    default_check_in: str = os.getenv("DEFAULT_CHECK_IN", "09:00")
    default_check_out: str = os.getenv("DEFAULT_CHECK_OUT", "17:00")


@dataclass(frozen=True)
class AvailabilityConfig:
    """How far ahead availability is resolved when no range is given."""

    window_days: int = _safe_int("AVAILABILITY_WINDOW_DAYS", "30")


@dataclass(frozen=True)
class PricingConfig:
    """Pricing defaults and the protection plan rate."""

    default_full_day_hours: int = _safe_int("DEFAULT_FULL_DAY_HOURS", "8")
    protection_plan_percentage: float = _safe_float("PROTECTION_PLAN_PERCENTAGE", "20")
    default_currency: str = os.getenv("DEFAULT_CURRENCY", "UZS")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    availability: AvailabilityConfig = field(default_factory=AvailabilityConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _parse_hour(env_var: str, value: str) -> int:
    try:
        hours, minutes = value.strip().split(":")
        hour = int(hours)
        int(minutes)
    except (ValueError, AttributeError):
        raise ValueError(f"{env_var} must be in HH:MM format, got {value!r}") from None
    if not 0 <= hour <= 24:
        raise ValueError(f"{env_var} must be between 00:00 and 24:00, got {value!r}")
    return hour


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.calendar.timezone not in pytz.all_timezones_set:
        raise ValueError(
            f"BOOKING_TIMEZONE must be a known timezone, got {config.calendar.timezone!r}"
        )

    check_in = _parse_hour("DEFAULT_CHECK_IN", config.calendar.default_check_in)
    check_out = _parse_hour("DEFAULT_CHECK_OUT", config.calendar.default_check_out)
    if check_in >= check_out:
        raise ValueError(
            "DEFAULT_CHECK_IN must be before DEFAULT_CHECK_OUT, "
            f"got {config.calendar.default_check_in} >= {config.calendar.default_check_out}"
        )

    if config.availability.window_days < 1:
        raise ValueError(
            f"AVAILABILITY_WINDOW_DAYS must be >= 1, got {config.availability.window_days}"
        )
    if not 1 <= config.pricing.default_full_day_hours <= 24:
        raise ValueError(
            "DEFAULT_FULL_DAY_HOURS must be between 1 and 24, "
            f"got {config.pricing.default_full_day_hours}"
        )
    if not 0.0 <= config.pricing.protection_plan_percentage <= 100.0:
        raise ValueError(
            "PROTECTION_PLAN_PERCENTAGE must be between 0 and 100, "
            f"got {config.pricing.protection_plan_percentage}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    configure_logging(getattr(logging, config.log_level.upper(), logging.INFO))
    logger.info("Configuration loaded for timezone '%s'", config.calendar.timezone)
    return config


# Singleton instance
settings = load_config()
