"""Subdivision of one dasha period into its nine sub-periods."""

from __future__ import annotations

from datetime import date
from fractions import Fraction
from typing import List

from .errors import IndivisiblePeriodError
from .model import Interval, shifted
from .rounding import to_days
from .weights import WeightTable


def is_divisible(duration_days: int, table: WeightTable) -> bool:
    """Whether a period can hold at least one day for every lord in ``table``."""

    return duration_days >= len(table)


def share_days(duration_days: int, order: List[str], table: WeightTable) -> List[int]:
    """Whole-day length of each lord in ``order`` within ``duration_days``.

    Every share but the last is rounded independently. The last absorbs the
    remainder so the shares always sum to ``duration_days``; if that leaves
    it under one day, days are borrowed from the nearest earlier share that
    can spare one.
    """

    total = table.total_weight()
    days = [
        to_days(Fraction(duration_days * table.weight(symbol), total))
        for symbol in order[:-1]
    ]
    last = duration_days - sum(days)
    idx = len(days) - 1
    while last < 1:
        while days[idx] <= 1:
            idx -= 1
        days[idx] -= 1
        last += 1
    days.append(last)
    return days


def partition(
    parent_start: date,
    parent_duration_days: int,
    start_symbol: str,
    table: WeightTable,
    level: int,
) -> List[Interval]:
    """Split ``[parent_start, parent_start + parent_duration_days)`` into nine
    contiguous periods in ring order starting at ``start_symbol``.

    Raises :class:`IndivisiblePeriodError` when the parent is shorter than
    the ring, since nine non-empty whole-day periods cannot fit.
    """

    if not is_divisible(parent_duration_days, table):
        raise IndivisiblePeriodError(
            f"{parent_duration_days} day period cannot be split into {len(table)} sub-periods"
        )
    order = table.rotate_from(start_symbol)
    out: List[Interval] = []
    cursor = parent_start
    for symbol, days in zip(order, share_days(parent_duration_days, order, table)):
        end = shifted(cursor, days)
        out.append(Interval(symbol, cursor, end, level))
        cursor = end
    return out


def partition_interval(parent: Interval, table: WeightTable) -> List[Interval]:
    """Sub-periods of ``parent``, seeded with the parent's own lord."""

    return partition(parent.start, parent.duration_days, parent.symbol, table, level=parent.level + 1)


__all__ = ["is_divisible", "partition", "partition_interval", "share_days"]
