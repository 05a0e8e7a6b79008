"""Sandhi (junction) windows around boundaries between sibling periods."""

from __future__ import annotations

from datetime import date
from fractions import Fraction
from typing import Callable, List, Sequence, Union

from . import config
from .model import Interval, TransitionWindow, shifted
from .rounding import as_fraction, round_half_even

Percent = Union[Fraction, float, int, str]


def default_window_percent(level: int) -> Fraction:
    percents = config.sandhi_percents()
    return percents.get(level, percents[max(percents)])


def half_window_days(percent: Percent, left: Interval, right: Interval) -> int:
    p = as_fraction(percent)
    # a window stays within the two periods either side of its boundary
    if not (0 <= p <= 1):
        raise ValueError(f"window percent {p} is outside [0, 1]")
    shorter = min(left.duration_days, right.duration_days)
    return round_half_even(p * shorter / 2)


def window_for(left: Interval, right: Interval, percent: Percent) -> TransitionWindow:
    half = half_window_days(percent, left, right)
    return TransitionWindow(
        from_symbol=left.symbol,
        to_symbol=right.symbol,
        level=left.level,
        transition_date=left.end,
        window_start=shifted(left.end, -half),
        window_end=shifted(left.end, half),
    )


def collect_upcoming(
    siblings: Sequence[Interval],
    from_date: date,
    horizon_days: int,
    window_percent_for: Callable[[int], Percent] = default_window_percent,
) -> List[TransitionWindow]:
    """Transition windows of ``siblings`` that overlap ``[from_date, from_date + horizon_days)``.

    ``siblings`` must be contiguous and in order; each adjacent pair yields
    one candidate window centred on the boundary.
    """

    if horizon_days < 0:
        raise ValueError("horizon_days must not be negative")
    until = shifted(from_date, horizon_days)
    out: List[TransitionWindow] = []
    for left, right in zip(siblings, siblings[1:]):
        if left.end != right.start:
            raise ValueError(f"{left.symbol} and {right.symbol} are not adjacent")
        window = window_for(left, right, window_percent_for(left.level))
        if window.intersects(from_date, until):
            out.append(window)
    return out


__all__ = ["collect_upcoming", "default_window_percent", "half_window_days", "window_for"]
