"""Top-level (Mahadasha) sequence from the birth anchor."""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import List, Optional, Union

from . import config
from .model import AnchorInput, Interval, shifted
from .rounding import as_fraction, to_days
from .weights import WeightTable

logger = logging.getLogger(__name__)


def balance_days(anchor: AnchorInput, table: WeightTable, year_length_days: Fraction) -> int:
    """Days left of the birth Mahadasha."""

    full = table.weight(anchor.starting_symbol) * year_length_days
    return to_days(full * (1 - anchor.progress_fraction))


def build(
    anchor: AnchorInput,
    table: WeightTable,
    horizon_intervals: Optional[int] = None,
    year_length_days: Union[Fraction, int, float, str, None] = None,
) -> List[Interval]:
    """Build the Mahadasha list.

    The first period is the balance of the birth lord; the rest are full
    periods in ring order, wrapping around the ring until
    ``horizon_intervals`` periods exist.
    """

    anchor.validate(table)
    count = config.horizon_intervals() if horizon_intervals is None else horizon_intervals
    if count < 1:
        raise ValueError("horizon_intervals must be at least 1")
    year = config.year_length_days() if year_length_days is None else as_fraction(year_length_days)
    if year <= 0:
        raise ValueError("year_length_days must be positive")

    symbol = anchor.starting_symbol
    first_end = shifted(anchor.birth_date, balance_days(anchor, table, year))
    periods = [Interval(symbol, anchor.birth_date, first_end, 1)]
    while len(periods) < count:
        symbol = table.next(symbol)
        start = periods[-1].end
        periods.append(Interval(symbol, start, shifted(start, to_days(table.weight(symbol) * year)), 1))

    logger.debug(
        "dasha_timeline_built",
        extra={
            "table": table.name,
            "start_lord": anchor.starting_symbol,
            "periods": len(periods),
            "timeline_end": periods[-1].end.isoformat(),
        },
    )
    return periods


__all__ = ["balance_days", "build"]
