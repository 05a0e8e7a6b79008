"""Environment-driven defaults for the dasha engine."""

from __future__ import annotations

import logging
import os
from fractions import Fraction
from typing import Dict

from .rounding import as_fraction

logger = logging.getLogger(__name__)

DEFAULT_YEAR_DAYS = "365.25"
DEFAULT_HORIZON_INTERVALS = 12
# Sandhi width as a share of the shorter neighbouring period, per level.
DEFAULT_SANDHI_PERCENTS = ("0.05", "0.10", "0.15", "0.20", "0.20", "0.20")


def year_length_days() -> Fraction:
    """Days per dasha year (``DASHA_YEAR_DAYS``)."""

    raw = os.getenv("DASHA_YEAR_DAYS")
    if raw:
        try:
            value = as_fraction(raw)
        except (TypeError, ValueError):
            value = None
        if value is not None and value > 0:
            return value
        logger.warning("dasha_config_invalid", extra={"key": "DASHA_YEAR_DAYS", "value": raw})
    return as_fraction(DEFAULT_YEAR_DAYS)


def horizon_intervals() -> int:
    """Number of Mahadashas to build (``DASHA_HORIZON_INTERVALS``)."""

    raw = os.getenv("DASHA_HORIZON_INTERVALS")
    if raw:
        try:
            value = int(raw)
        except ValueError:
            value = 0
        if value >= 1:
            return value
        logger.warning("dasha_config_invalid", extra={"key": "DASHA_HORIZON_INTERVALS", "value": raw})
    return DEFAULT_HORIZON_INTERVALS


def sandhi_percents() -> Dict[int, Fraction]:
    """Sandhi percentage per level 1..6 (``DASHA_SANDHI_PERCENTS``)."""

    defaults = [as_fraction(p) for p in DEFAULT_SANDHI_PERCENTS]
    raw = os.getenv("DASHA_SANDHI_PERCENTS")
    values = defaults
    if raw:
        try:
            parsed = [as_fraction(part) for part in raw.split(",")]
        except (TypeError, ValueError):
            parsed = []
        if len(parsed) == len(defaults) and all(0 <= p <= 1 for p in parsed):
            values = parsed
        else:
            logger.warning("dasha_config_invalid", extra={"key": "DASHA_SANDHI_PERCENTS", "value": raw})
    return {level: pct for level, pct in enumerate(values, start=1)}


__all__ = [
    "DEFAULT_HORIZON_INTERVALS",
    "DEFAULT_SANDHI_PERCENTS",
    "DEFAULT_YEAR_DAYS",
    "horizon_intervals",
    "sandhi_percents",
    "year_length_days",
]
